"""Opt-in stdout logging for applications using the client.

The library only calls ``get_logger``; ``configure_logging`` is for the
application that owns the process.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from ..config import LoggingSettings
from . import fields
from .context import request_fields


def _http_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: getattr(record, name)
        for name in fields.RECORD_FIELDS
        if getattr(record, name, None) is not None
    }


class RequestFieldFilter(logging.Filter):
    """Copy the executing request's fields and the service name onto records.

    Values passed explicitly through ``extra`` are left alone.
    """

    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self._service = service

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in request_fields().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        if self._service and not hasattr(record, fields.SERVICE):
            setattr(record, fields.SERVICE, self._service)
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including any HTTP fields on the record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            fields.TIMESTAMP: datetime.now(UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
        }
        payload.update(_http_fields(record))
        if record.exc_info:
            payload[fields.EXCEPTION] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Human-readable lines with HTTP fields appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extra = _http_fields(record)
        if not extra:
            return message
        suffix = " ".join(f"{key}={value}" for key, value in extra.items())
        return f"{message} {suffix}"


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Existing root handlers are replaced, so repeated calls never duplicate
    output.
    """
    settings = LoggingSettings() if settings is None else settings
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.level)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(settings.level)
    handler.addFilter(RequestFieldFilter(service=settings.service))
    handler.setFormatter(JsonFormatter() if settings.json_output else PlainFormatter())
    root.addHandler(handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger using Python's standard logging hierarchy."""
    return logging.getLogger(name)
