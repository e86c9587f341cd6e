"""
Dialect strategy registry.
"""

from .base import Dialect, DialectCapabilities
from .firebird import FirebirdDialect
from .pagination import apply_limit, rewrite_pagination, strip_limit_offset

__all__ = [
    "Dialect",
    "DialectCapabilities",
    "FirebirdDialect",
    "apply_limit",
    "rewrite_pagination",
    "strip_limit_offset",
]
