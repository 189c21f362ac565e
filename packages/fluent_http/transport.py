"""Transport capability and its default ``httpx`` implementation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

import httpx

from .errors import TransportError
from .messages import Request, Response


class Transport(Protocol):
    """Capability that performs the network exchange for one request."""

    def send(self, request: Request) -> Response:
        """Send ``request`` and return its response, raising on failure."""
        ...


class HttpxTransport:
    """Synchronous transport over ``httpx.Client``."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        follow_redirects: bool = False,
        transport: httpx.BaseTransport | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Create a transport owning a new client unless one is injected."""
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            follow_redirects=follow_redirects,
            transport=transport,
        )

    def close(self) -> None:
        """Close underlying transport resources when owned."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        """Enter context manager scope."""
        return self

    def __exit__(self, *_: object) -> None:
        """Exit context manager scope and close client."""
        self.close()

    def send(self, request: Request) -> Response:
        """Issue one request and map transport failures to ``TransportError``."""
        try:
            raw = self._client.request(
                method=request.method.value,
                url=request.url,
                headers=dict(request.headers),
                content=request.body,
            )
        except httpx.RequestError as exc:
            raise TransportError(
                message=f"HTTP request failed for {request.method.value} {request.url}",
                method=request.method.value,
                url=request.url,
                cause=exc,
            ) from exc

        return Response(
            status_code=raw.status_code,
            request=request,
            reason=raw.reason_phrase,
            headers=dict(raw.headers.items()),
            body=raw.content,
        )
