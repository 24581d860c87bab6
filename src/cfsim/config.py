"""cfsim runtime configuration helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import ConfigError

_ENZYME_TABLE_ENV = "CFSIM_ENZYME_TABLE"
_REQUIRE_CIRCULAR_ENV = "CFSIM_GIBSON_REQUIRE_CIRCULAR"
_LOG_LEVEL_ENV = "CFSIM_LOG_LEVEL"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOGGER = logging.getLogger(__name__)


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if not value:
        return None
    return value.strip() or None


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"", "0", "false", "no"}:
        return False
    if raw in {"1", "true", "yes"}:
        return True
    return default


def resolve_enzyme_table_path(preferred: str | Path | None = None) -> Path | None:
    """Return the extra enzyme table requested by CLI/env, if any."""

    raw = preferred if preferred is not None else _env_str(_ENZYME_TABLE_ENV)
    if raw is None:
        return None
    path = Path(raw)
    if not path.exists():
        raise ConfigError(f"Enzyme table '{path}' not found.")
    LOGGER.debug("resolve_enzyme_table_path path=%s env=%s", path, _env_str(_ENZYME_TABLE_ENV))
    return path


def resolve_require_circular(preferred: bool | None = None) -> bool:
    """Whether Gibson assembly must close into a circular product."""

    if preferred is not None:
        return bool(preferred)
    return _env_bool(_REQUIRE_CIRCULAR_ENV, default=True)


def resolve_log_level(preferred: str | None = None) -> int:
    name = (preferred or _env_str(_LOG_LEVEL_ENV) or "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level '{name}'.")
    return level


def configure_logging(preferred: str | None = None) -> int:
    """Configure the root logger for CLI use and return the chosen level."""

    level = resolve_log_level(preferred)
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("cfsim").setLevel(level)
    return level


__all__ = [
    "resolve_enzyme_table_path",
    "resolve_require_circular",
    "resolve_log_level",
    "configure_logging",
    "_ENZYME_TABLE_ENV",
    "_REQUIRE_CIRCULAR_ENV",
    "_LOG_LEVEL_ENV",
]
