"""
Utility helpers shared across fbdialect packages.
"""

from .logging import configure_logging, get_logger, time_call
from .settings import SettingsError, resolve_slow_query_ms, resolve_warn_on_skipped

__all__ = [
    "SettingsError",
    "configure_logging",
    "get_logger",
    "resolve_slow_query_ms",
    "resolve_warn_on_skipped",
    "time_call",
]
