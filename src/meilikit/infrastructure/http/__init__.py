from meilikit.infrastructure.http.client import NO_BODY, HttpRequests, normalize_host

__all__ = [
    "HttpRequests",
    "NO_BODY",
    "normalize_host",
]
