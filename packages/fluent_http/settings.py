"""Immutable per-client settings assembled by ``ClientBuilder``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from .mapper import EntityMapper

if TYPE_CHECKING:
    from .builder import RequestBuilder

RequestDecorator = Callable[["RequestBuilder"], None]


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Base URL, default mapper and request decorators for one client."""

    base_url: str = ""
    entity_mapper: EntityMapper | None = None
    decorators: tuple[RequestDecorator, ...] = ()


def normalize_base_url(value: str) -> str:
    """Return ``value`` without trailing slashes; empty stays empty."""
    if value is None:
        raise TypeError("Base URL may not be None")
    return value.rstrip("/")
