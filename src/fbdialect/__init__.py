"""
fbdialect public package initialization.

Firebird SQL dialect support: FIRST/SKIP and ROWS pagination rewriting,
INSERT ... RETURNING construction, and the abstract column type map.
"""

from .adapters import ConnectionConfig, FirebirdAdapter  # noqa: F401
from .dialects import FirebirdDialect, apply_limit, rewrite_pagination  # noqa: F401
from .query import (  # noqa: F401
    BoundStatement,
    InsertCommandBuilder,
    Query,
    QueryBuilder,
    RawExpression,
)
from .schema import (  # noqa: F401
    ColumnSchema,
    ColumnType,
    SchemaError,
    SchemaRegistry,
    TableSchema,
    TYPE_MAP,
    get_column_type,
)

__all__ = [
    "BoundStatement",
    "ColumnSchema",
    "ColumnType",
    "ConnectionConfig",
    "FirebirdAdapter",
    "FirebirdDialect",
    "InsertCommandBuilder",
    "Query",
    "QueryBuilder",
    "RawExpression",
    "SchemaError",
    "SchemaRegistry",
    "TYPE_MAP",
    "TableSchema",
    "apply_limit",
    "get_column_type",
    "rewrite_pagination",
]
