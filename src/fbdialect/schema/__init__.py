"""
Schema metadata and column type mapping.
"""

from .table import ColumnSchema, SchemaError, SchemaRegistry, TableSchema
from .types import STRING_TYPES, TYPE_MAP, ColumnType, get_column_type

__all__ = [
    "ColumnSchema",
    "ColumnType",
    "STRING_TYPES",
    "SchemaError",
    "SchemaRegistry",
    "TYPE_MAP",
    "TableSchema",
    "get_column_type",
]
