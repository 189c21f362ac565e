"""Top-level fluent HTTP client and its builder."""

from __future__ import annotations

from .builder import RequestBuilder
from .config import FluentHttpSettings
from .mapper import EntityMapper
from .messages import HttpMethod
from .settings import ClientSettings, RequestDecorator, normalize_base_url
from .transport import HttpxTransport, Transport


class Client:
    """Entry point creating one ``RequestBuilder`` per call.

    Use ``Client.builder()`` to configure a client.
    """

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: Transport | None = None,
        owns_transport: bool | None = None,
    ) -> None:
        """Create a client; an owned ``HttpxTransport`` is used by default."""
        if settings is None:
            raise TypeError("Client settings may not be None")
        self._settings = settings
        self._owns_transport = (
            transport is None if owns_transport is None else owns_transport
        )
        self._transport: Transport = (
            HttpxTransport() if transport is None else transport
        )

    @classmethod
    def builder(cls) -> ClientBuilder:
        """Return a new ``ClientBuilder``."""
        return ClientBuilder()

    @classmethod
    def from_settings(
        cls,
        settings: FluentHttpSettings,
        *,
        entity_mapper: EntityMapper | None = None,
    ) -> Client:
        """Create a client whose base URL and transport come from config."""
        transport = HttpxTransport(
            timeout_seconds=settings.transport.timeout_seconds,
            follow_redirects=settings.transport.follow_redirects,
            headers={"User-Agent": settings.transport.user_agent},
        )
        client_settings = ClientSettings(
            base_url=normalize_base_url(settings.base_url),
            entity_mapper=entity_mapper,
        )
        return cls(client_settings, transport=transport, owns_transport=True)

    @property
    def settings(self) -> ClientSettings:
        """Return the immutable settings of this client."""
        return self._settings

    @property
    def mapper(self) -> EntityMapper | None:
        """Return the default entity mapper, if one was configured."""
        return self._settings.entity_mapper

    def close(self) -> None:
        """Close the transport when this client created it."""
        close = getattr(self._transport, "close", None)
        if self._owns_transport and callable(close):
            close()

    def __enter__(self) -> Client:
        """Enter context manager scope."""
        return self

    def __exit__(self, *_: object) -> None:
        """Exit context manager scope and close transport resources."""
        self.close()

    def get(self, url: str) -> RequestBuilder:
        """Start a GET request."""
        return self._request(HttpMethod.GET, url)

    def post(self, url: str) -> RequestBuilder:
        """Start a POST request."""
        return self._request(HttpMethod.POST, url)

    def put(self, url: str) -> RequestBuilder:
        """Start a PUT request."""
        return self._request(HttpMethod.PUT, url)

    def head(self, url: str) -> RequestBuilder:
        """Start a HEAD request."""
        return self._request(HttpMethod.HEAD, url)

    def delete(self, url: str) -> RequestBuilder:
        """Start a DELETE request."""
        return self._request(HttpMethod.DELETE, url)

    def patch(self, url: str) -> RequestBuilder:
        """Start a PATCH request."""
        return self._request(HttpMethod.PATCH, url)

    def _request(self, method: HttpMethod, url: str) -> RequestBuilder:
        return RequestBuilder(
            method, url, settings=self._settings, transport=self._transport
        )


class ClientBuilder:
    """Accumulates client settings; ``build()`` freezes them."""

    def __init__(self) -> None:
        self._base_url = ""
        self._entity_mapper: EntityMapper | None = None
        self._decorators: list[RequestDecorator] = []
        self._transport: Transport | None = None

    def with_base_url(self, base_url: str) -> ClientBuilder:
        """Set the base URL prepended to every request path.

        Trailing slashes are stripped. An empty string disables the base URL.
        """
        self._base_url = normalize_base_url(base_url)
        return self

    def with_entity_mapper(self, entity_mapper: EntityMapper | None) -> ClientBuilder:
        """Set the default mapper used by requests without their own."""
        self._entity_mapper = entity_mapper
        return self

    def with_decorator(self, decorator: RequestDecorator) -> ClientBuilder:
        """Append one decorator run against every request before it is sent."""
        if decorator is None:
            raise TypeError("Decorator may not be None")
        self._decorators.append(decorator)
        return self

    def with_transport(self, transport: Transport) -> ClientBuilder:
        """Use ``transport`` instead of a client-owned ``HttpxTransport``."""
        self._transport = transport
        return self

    def build(self) -> Client:
        """Create a client from the accumulated settings."""
        settings = ClientSettings(
            base_url=self._base_url,
            entity_mapper=self._entity_mapper,
            decorators=tuple(self._decorators),
        )
        return Client(settings, transport=self._transport)
