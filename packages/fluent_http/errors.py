"""Typed errors raised by the fluent HTTP client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class FluentHttpError(Exception):
    """Base error type for fluent HTTP client failures."""

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(eq=False)
class MalformedUrlError(FluentHttpError):
    """Resolved request URL is not a well-formed absolute URL."""

    url: str = ""


@dataclass(eq=False)
class EntityMappingError(FluentHttpError):
    """Base error for entity serialization and deserialization failures."""


@dataclass(eq=False)
class UnsupportedTypeError(EntityMappingError):
    """No converter is registered for the requested type."""

    type_name: str = ""
    operation: str = ""


@dataclass(eq=False)
class MissingMapperError(EntityMappingError):
    """A payload needs conversion but no entity mapper was resolved."""


@dataclass(eq=False)
class TransportError(FluentHttpError):
    """Transport-level failure while sending one request."""

    method: str = ""
    url: str = ""
    cause: Exception | None = None
