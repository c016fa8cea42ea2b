from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from meilikit.domain.exceptions import ApiError, MeiliSearchError, TransportError
from meilikit.infrastructure.http.serializers import decode_body, encode_json, encode_query
from meilikit.version import __version__

logger = logging.getLogger(__name__)

# Distinguishes "no body" from an explicit JSON null (used to reset a setting).
NO_BODY: Any = object()

_JSON_CONTENT_TYPE = "application/json"


def normalize_host(host: str) -> str:
    """Add a scheme when missing and guarantee a trailing slash."""
    if not host.startswith(("http://", "https://")):
        host = f"http://{host}"
    if not host.endswith("/"):
        host = f"{host}/"
    return host


def client_agent(client_agents: Sequence[str] = ()) -> str:
    return ";".join([f"meilikit (v{__version__})", *client_agents])


class HttpRequests:
    """Async JSON-over-HTTP transport bound to one server and API key."""

    def __init__(
        self,
        host: str,
        api_key: str | None = None,
        *,
        timeout: float | None = None,
        client_agents: Sequence[str] = (),
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = normalize_host(host)
        default_headers = {"X-Meilisearch-Client": client_agent(client_agents)}
        if api_key:
            default_headers["Authorization"] = f"Bearer {api_key}"
        if headers:
            default_headers.update(headers)

        client_kwargs: dict[str, Any] = {}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=default_headers,
            transport=transport,
            **client_kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = NO_BODY,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        request_headers = dict(headers or {})
        content: bytes | None = None
        if body is not NO_BODY:
            if isinstance(body, (str, bytes)):
                # Raw payloads (csv, ndjson, json text) are forwarded as-is.
                content = body.encode("utf-8") if isinstance(body, str) else body
                request_headers.setdefault("Content-Type", _JSON_CONTENT_TYPE)
            else:
                content = encode_json(body)
                request_headers["Content-Type"] = _JSON_CONTENT_TYPE

        logger.debug("Sending request", extra={"method": method, "path": path})
        try:
            response = await self._client.request(
                method,
                path,
                params=encode_query(params),
                content=content,
                headers=request_headers,
            )
        except httpx.RequestError as exc:
            logger.warning(
                "Request failed without a response",
                extra={"method": method, "path": path, "error": str(exc)},
            )
            reason = str(exc) or type(exc).__name__
            raise TransportError(method, f"{self._base_url}{path}", reason) from exc

        if not response.is_success:
            error = self._api_error(response)
            logger.warning(
                "Server rejected request",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": error.status_code,
                    "code": error.code,
                },
            )
            raise error

        try:
            return decode_body(response.content)
        except ValueError as exc:
            raise MeiliSearchError(f"{method} {path} returned a non-JSON body") from exc

    @staticmethod
    def _api_error(response: httpx.Response) -> ApiError:
        try:
            payload = decode_body(response.content)
        except ValueError:
            payload = None
        if isinstance(payload, dict) and "message" in payload:
            return ApiError(
                response.status_code,
                payload["message"],
                code=payload.get("code"),
                type=payload.get("type"),
                link=payload.get("link"),
            )
        return ApiError(response.status_code, response.text or response.reason_phrase)

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        body: Any = NO_BODY,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("POST", path, params=params, body=body, headers=headers)

    async def put(
        self,
        path: str,
        body: Any = NO_BODY,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("PUT", path, params=params, body=body, headers=headers)

    async def patch(self, path: str, body: Any = NO_BODY) -> Any:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("DELETE", path, params=params)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpRequests:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
