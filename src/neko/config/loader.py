#
# config/loader.py
#
"""
Loads NekoConfig from TOML, applying environment variable overrides.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import attrs
import structlog

from neko.config.models import NekoConfig
from neko.exceptions import ConfigurationError
from neko.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.loader")

ENV_OVERRIDES: dict[str, str] = {
    "NEKO_LOG_LEVEL": "log_level",
    "NEKO_VERIFY_SCOPE": "verify_scope",
}


def _extract_table(data: Mapping[str, Any], path: Path) -> Mapping[str, Any]:
    """A pyproject.toml keeps settings under [tool.neko]; any other file at top level."""
    if path.name == "pyproject.toml":
        return data.get("tool", {}).get("neko", {})
    return data


def build_config(values: Mapping[str, Any], source: str | None = None) -> NekoConfig:
    known = {a.name for a in attrs.fields(NekoConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {unknown}", path=source)

    merged = dict(values)
    for env_var, key in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_var)
        if env_value:
            log.debug("Applying environment override", env_var=env_var, key=key)
            merged[key] = env_value

    try:
        return NekoConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration value: {e}", path=source) from e


def load_config(path: Path | None = None) -> NekoConfig:
    """
    Loads configuration from ``path``.

    A missing path (or None) yields defaults plus environment overrides.
    """
    if path is None or not path.is_file():
        log.debug("No configuration file, using defaults", path=str(path) if path else None)
        return build_config({})

    log.debug("Loading configuration", path=str(path))
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML: {e}", path=str(path)) from e
    except OSError as e:
        raise ConfigurationError(f"Could not read configuration: {e}", path=str(path)) from e

    table = _extract_table(data, path)
    if not isinstance(table, Mapping):
        raise ConfigurationError("The neko configuration must be a table", path=str(path))

    config = build_config(table, source=str(path))
    log.info("Configuration loaded", path=str(path), verify_scope=config.verify_scope.value)
    return config


# 🔼⚙️
