"""
Environment-driven settings shared by the adapter and query layers.
"""

from __future__ import annotations

import os

SLOW_QUERY_ENV = "FBDIALECT_SLOW_QUERY_MS"
WARN_SKIPPED_ENV = "FBDIALECT_WARN_SKIPPED_COLUMNS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class SettingsError(ValueError):
    """Raised when a setting cannot be parsed."""


def parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise SettingsError(f"Invalid boolean value for '{key}': {value!r}")


def parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise SettingsError(f"Invalid integer value for '{key}': {value!r}") from exc


def resolve_slow_query_ms(*, default: int, override: int | None = None) -> int:
    """
    Pick the slow query threshold: explicit override, then environment, then default.
    """
    if override is not None:
        return override
    raw = os.getenv(SLOW_QUERY_ENV)
    if not raw:
        return default
    return parse_int(raw, key=SLOW_QUERY_ENV)


def resolve_warn_on_skipped(override: bool | None = None) -> bool:
    if override is not None:
        return override
    raw = os.getenv(WARN_SKIPPED_ENV)
    if not raw:
        return False
    return parse_bool(raw, key=WARN_SKIPPED_ENV)
