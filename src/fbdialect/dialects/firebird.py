"""
Firebird dialect implementation.
"""

from __future__ import annotations

from typing import Final

from ..schema.types import ColumnType, get_column_type
from .base import DialectCapabilities
from .pagination import apply_limit, rewrite_pagination

PARAM_PREFIX: Final[str] = "p"


class FirebirdDialect:
    """
    Firebird dialect using named ``:pN`` placeholders and ``FIRST``/``SKIP`` paging.
    """

    name: Final[str] = "firebird"
    param_style: Final[str] = "named"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_returning=True,
        supports_limit_offset=False,
    )

    def rewrite_pagination(self, sql: str, limit: int | None, offset: int | None) -> str:
        return rewrite_pagination(sql, limit, offset)

    def apply_limit(self, sql: str, limit: int | None, offset: int | None) -> str:
        return apply_limit(sql, limit, offset)

    def parameter_placeholder(self, position: int | None = None) -> str:
        return f":{self.parameter_name(position or 0)}"

    def parameter_name(self, position: int) -> str:
        return f"{PARAM_PREFIX}{position}"

    def returning_clause(self, column: str) -> str:
        return f" RETURNING {column}"

    def column_type(self, column_type: ColumnType | str) -> str:
        return get_column_type(column_type)
