"""Typed runtime configuration for fluent HTTP clients.

Precedence is always, highest first:
1) explicit init / CLI params
2) environment variables (``FLUENT_HTTP_`` prefix, ``__`` nesting)
3) ``~/.config/fluent-http/config.yaml``
4) model defaults

Example: ``FLUENT_HTTP_TRANSPORT__TIMEOUT_SECONDS=2.5`` sets
``transport.timeout_seconds``.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, ClassVar, Literal, Mapping

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "fluent-http" / "config.yaml"
ENV_PREFIX = "FLUENT_HTTP_"


class LoggingSettings(BaseModel):
    """Arguments forwarded to ``configure_logging``."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "fluent-http"


class TransportSettings(BaseModel):
    """Options for the default ``HttpxTransport``."""

    timeout_seconds: float = Field(default=10.0, gt=0)
    follow_redirects: bool = False
    user_agent: str = Field(default="fluent-http/0.1", min_length=1)


class FluentHttpSettings(BaseSettings):
    """Root settings resolved from init/env/yaml/default sources."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    base_url: str = ""
    transport: TransportSettings = Field(default_factory=TransportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> FluentHttpSettings:
    """Resolve settings from explicit sources using the standard cascade.

    Unlike constructing ``FluentHttpSettings()`` directly, every source is
    taken from the arguments, which keeps callers and tests independent of
    the real process environment when ``environ`` is supplied.
    """
    merged = _load_file_config(path=config_path)
    merged = _merge_dicts(merged, _load_env_config(environ=environ))
    merged = _merge_dicts(merged, dict(cli_params or {}))
    return FluentHttpSettings.model_validate(merged)


def _load_file_config(*, path: str | Path | None) -> dict[str, Any]:
    """Load YAML config from disk; return empty dict when file is absent."""
    resolved = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not resolved.exists():
        return {}

    with resolved.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle)

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config file must contain a top-level mapping: {resolved}")
    return parsed


def _load_env_config(*, environ: Mapping[str, str] | None) -> dict[str, Any]:
    """Map prefixed environment variables into nested config."""
    env = environ if environ is not None else os.environ
    output: dict[str, Any] = {}

    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = [
            segment.strip().lower()
            for segment in key[len(ENV_PREFIX) :].split("__")
            if segment.strip()
        ]
        if not path:
            continue

        cursor = output
        for segment in path[:-1]:
            child = cursor.get(segment)
            if not isinstance(child, dict):
                child = {}
                cursor[segment] = child
            cursor = child
        cursor[path[-1]] = _coerce_scalar(raw_value)

    return output


def _merge_dicts(
    base: Mapping[str, Any], override: Mapping[str, Any]
) -> dict[str, Any]:
    """Recursively merge mappings, with ``override`` taking precedence."""
    result = copy.deepcopy(dict(base))
    for key, override_value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(override_value, Mapping):
            result[key] = _merge_dicts(base_value, override_value)
            continue
        result[key] = copy.deepcopy(override_value)
    return result


def _coerce_scalar(raw: str) -> Any:
    """Coerce obvious booleans, nulls and JSON; leave the rest to pydantic."""
    value = raw.strip()
    lowered = value.lower()

    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value.startswith("{") or value.startswith("["):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return raw
    return raw
