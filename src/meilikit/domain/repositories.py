from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class HttpTransport(Protocol):
    """Contract for issuing requests against the search server.

    Implementations return the decoded JSON body (``None`` for empty
    responses) and raise ``ApiError`` or ``TransportError``.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = ...,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded response body."""

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """Send a GET request."""

    async def post(
        self,
        path: str,
        body: Any = ...,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a POST request."""

    async def put(
        self,
        path: str,
        body: Any = ...,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a PUT request."""

    async def patch(self, path: str, body: Any = ...) -> Any:
        """Send a PATCH request."""

    async def delete(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> Any:
        """Send a DELETE request."""
