"""Public API of the fluent HTTP client."""

from .builder import RequestBuilder, resolve_url, validate_absolute_url
from .client import Client, ClientBuilder
from .config import (
    FluentHttpSettings,
    LoggingSettings,
    TransportSettings,
    load_settings,
)
from .errors import (
    EntityMappingError,
    FluentHttpError,
    MalformedUrlError,
    MissingMapperError,
    TransportError,
    UnsupportedTypeError,
)
from .mapper import EntityMapper
from .messages import HttpMethod, Request, Response
from .settings import ClientSettings
from .transport import HttpxTransport, Transport

__all__ = [
    "Client",
    "ClientBuilder",
    "ClientSettings",
    "EntityMapper",
    "EntityMappingError",
    "FluentHttpError",
    "FluentHttpSettings",
    "HttpMethod",
    "HttpxTransport",
    "LoggingSettings",
    "MalformedUrlError",
    "MissingMapperError",
    "Request",
    "RequestBuilder",
    "Response",
    "Transport",
    "TransportError",
    "TransportSettings",
    "UnsupportedTypeError",
    "load_settings",
    "resolve_url",
    "validate_absolute_url",
]
