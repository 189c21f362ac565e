"""Immutable request and response value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, TypeVar

from .errors import MissingMapperError
from .mapper import EntityMapper

T = TypeVar("T")

InputSupplier = Callable[[], object]
ExceptionHandler = Callable[[Exception], None]


class HttpMethod(str, Enum):
    """HTTP verbs supported by the client."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    HEAD = "HEAD"
    DELETE = "DELETE"
    PATCH = "PATCH"


def _frozen_headers(headers: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(headers))


@dataclass(frozen=True)
class Request:
    """Fully resolved description of one HTTP call."""

    method: HttpMethod
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    input: InputSupplier | None = None
    mapper: EntityMapper | None = None
    body: bytes | None = None
    exception_handler: ExceptionHandler | None = None

    def __post_init__(self) -> None:
        """Detach headers from the caller's mapping."""
        object.__setattr__(self, "headers", _frozen_headers(self.headers))


@dataclass(frozen=True)
class Response:
    """Result of executing one request."""

    status_code: int
    request: Request
    reason: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        """Detach headers from the transport's mapping."""
        object.__setattr__(self, "headers", _frozen_headers(self.headers))

    @property
    def ok(self) -> bool:
        """Return True for 2xx status codes."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Return the body decoded as UTF-8, replacing invalid bytes."""
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return one response header value using case-insensitive lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    def decode(self, target: type[T]) -> T:
        """Deserialize the body into ``target`` using the request's mapper."""
        mapper = self.request.mapper
        if mapper is None:
            raise MissingMapperError(
                message=(
                    f"Cannot decode {self.request.method.value} {self.request.url} "
                    "response: no entity mapper configured"
                )
            )
        return mapper.deserialize(self.body, target)
