"""Shared fakes for fluent HTTP client tests."""

from __future__ import annotations

from packages.fluent_http import Request, Response


class FakeTransport:
    """Transport double returning canned responses or raising one error."""

    def __init__(
        self,
        *,
        status_code: int = 200,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.headers = dict(headers or {})
        self.error = error
        self.requests: list[Request] = []
        self.closed = False

    def send(self, request: Request) -> Response:
        """Record the request, then raise or answer."""
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return Response(
            status_code=self.status_code,
            request=request,
            headers=self.headers,
            body=self.body,
        )

    def close(self) -> None:
        """Record that the owner closed the transport."""
        self.closed = True
