"""Per-request log fields bound while ``execute()`` talks to the transport."""

from __future__ import annotations

from contextvars import ContextVar, Token
from types import MappingProxyType
from typing import Mapping

from . import fields

_NO_FIELDS: Mapping[str, str] = MappingProxyType({})

_REQUEST_FIELDS: ContextVar[Mapping[str, str]] = ContextVar(
    "fluent_http_request_fields", default=_NO_FIELDS
)


def request_fields() -> Mapping[str, str]:
    """Return the HTTP fields of the request currently executing, if any."""
    return _REQUEST_FIELDS.get()


class RequestLogScope:
    """Tag records logged inside the block with one request's method and URL.

    Exceptions leaving the block propagate unchanged.
    """

    def __init__(self, method: str, url: str) -> None:
        self._fields = MappingProxyType(
            {fields.HTTP_METHOD: method, fields.HTTP_URL: url}
        )
        self._token: Token[Mapping[str, str]] | None = None

    def __enter__(self) -> RequestLogScope:
        self._token = _REQUEST_FIELDS.set(self._fields)
        return self

    def __exit__(self, *_: object) -> None:
        if self._token is not None:
            _REQUEST_FIELDS.reset(self._token)
            self._token = None
