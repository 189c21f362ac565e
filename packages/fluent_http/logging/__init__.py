"""Logging helpers for the fluent HTTP client."""

from .config import (
    JsonFormatter,
    PlainFormatter,
    RequestFieldFilter,
    configure_logging,
    get_logger,
)
from .context import RequestLogScope, request_fields

__all__ = [
    "configure_logging",
    "get_logger",
    "JsonFormatter",
    "PlainFormatter",
    "RequestFieldFilter",
    "RequestLogScope",
    "request_fields",
]
