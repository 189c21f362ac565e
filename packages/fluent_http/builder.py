"""Mutable per-call request staging and the execute pipeline."""

from __future__ import annotations

from typing import Callable, Mapping

import httpx

from .errors import MalformedUrlError, MissingMapperError
from .logging import RequestLogScope, fields, get_logger
from .mapper import EntityMapper
from .messages import (
    ExceptionHandler,
    HttpMethod,
    InputSupplier,
    Request,
    Response,
)
from .settings import ClientSettings
from .transport import Transport

_LOGGER = get_logger(__name__)

ResponseHandler = Callable[[Response], None]


def resolve_url(base_url: str, url: str) -> str:
    """Join one request path onto a base URL.

    A single leading slash on ``url`` is dropped. An empty ``base_url``
    leaves the remaining path untouched.
    """
    if url.startswith("/"):
        url = url[1:]
    if base_url:
        return f"{base_url}/{url}"
    return url


def validate_absolute_url(url: str) -> str:
    """Return ``url`` when it parses as an absolute URL, else raise."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise MalformedUrlError(
            message=f"Malformed URL {url!r}: {exc}", url=url
        ) from exc
    if not parsed.scheme:
        raise MalformedUrlError(message=f"URL {url!r} has no scheme", url=url)
    if not parsed.host:
        raise MalformedUrlError(message=f"URL {url!r} has no host", url=url)
    return url


def _ignore_response(response: Response) -> None:
    return None


class RequestBuilder:
    """Fluent staging object for one request; not shared between threads.

    Created by the ``Client`` verb methods. Decorators registered on the
    client receive this builder during ``execute()`` and may change any
    staged value before the request is frozen.
    """

    def __init__(
        self,
        method: HttpMethod,
        url: str,
        *,
        settings: ClientSettings,
        transport: Transport,
    ) -> None:
        if url is None:
            raise TypeError("URL may not be None")
        self._settings = settings
        self._transport = transport
        self._method = method
        self._url = validate_absolute_url(resolve_url(settings.base_url, url))
        self._headers: dict[str, str] = {}
        self._input: InputSupplier | None = None
        self._mapper: EntityMapper | None = settings.entity_mapper
        self._handlers: dict[int, ResponseHandler] = {}
        self._fallback: ResponseHandler = _ignore_response
        self._exception_handler: ExceptionHandler | None = None

    @property
    def method(self) -> HttpMethod:
        """Return the staged HTTP method."""
        return self._method

    @property
    def url(self) -> str:
        """Return the resolved absolute URL."""
        return self._url

    @property
    def headers(self) -> Mapping[str, str]:
        """Return a copy of the staged headers."""
        return dict(self._headers)

    @property
    def mapper(self) -> EntityMapper | None:
        """Return the entity mapper the request will use, if any."""
        return self._mapper

    def with_input(self, supplier: InputSupplier) -> RequestBuilder:
        """Set the supplier producing the request body object."""
        self._input = supplier
        return self

    def with_mapper(self, mapper: EntityMapper) -> RequestBuilder:
        """Override the client's default entity mapper for this request."""
        self._mapper = mapper
        return self

    def with_header(self, key: str, value: str) -> RequestBuilder:
        """Set one request header, replacing any previous value."""
        self._headers[key] = value
        return self

    def on_status(self, code: int, handler: ResponseHandler) -> RequestBuilder:
        """Route responses with status ``code`` to ``handler``."""
        self._handlers[code] = handler
        return self

    def on_remaining(self, handler: ResponseHandler) -> RequestBuilder:
        """Route responses with no status-specific handler to ``handler``."""
        self._fallback = handler
        return self

    def on_exception(self, handler: ExceptionHandler) -> RequestBuilder:
        """Absorb transport failures into ``handler`` instead of raising."""
        self._exception_handler = handler
        return self

    def build(self) -> Request:
        """Freeze the staged values into an immutable ``Request``."""
        body: bytes | None = None
        if self._input is not None:
            if self._mapper is None:
                raise MissingMapperError(
                    message=(
                        f"{self._method.value} {self._url} has a body but no "
                        "entity mapper is configured"
                    )
                )
            body = self._mapper.serialize(self._input())
        return Request(
            method=self._method,
            url=self._url,
            headers=self._headers,
            input=self._input,
            mapper=self._mapper,
            body=body,
            exception_handler=self._exception_handler,
        )

    def execute(self) -> Response | None:
        """Decorate, freeze, send and dispatch the request.

        Returns the response after its handler ran, or ``None`` when a
        transport failure was passed to the exception handler. Only the
        transport call is guarded; errors raised by handlers propagate.
        """
        for decorator in self._settings.decorators:
            decorator(self)

        request = self.build()
        with RequestLogScope(request.method.value, request.url):
            _LOGGER.debug("Dispatching HTTP request")
            try:
                response = self._transport.send(request)
            except Exception as exc:
                if request.exception_handler is None:
                    raise
                _LOGGER.warning("HTTP request failed; passing to exception handler")
                request.exception_handler(exc)
                return None

            _LOGGER.debug(
                "Received HTTP response",
                extra={fields.HTTP_STATUS: response.status_code},
            )
        handler = self._handlers.get(response.status_code, self._fallback)
        handler(response)
        return response
