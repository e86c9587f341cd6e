"""
Abstract column types and their Firebird physical definitions.
"""

from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ColumnType(str, Enum):
    PK = "pk"
    BIGPK = "bigpk"
    STRING = "string"
    TEXT = "text"
    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    DATE = "date"
    BINARY = "binary"
    BOOLEAN = "boolean"
    MONEY = "money"


TYPE_MAP: Mapping[ColumnType, str] = MappingProxyType(
    {
        ColumnType.PK: "integer NOT NULL PRIMARY KEY",
        ColumnType.BIGPK: "integer NOT NULL PRIMARY KEY",
        ColumnType.STRING: "varchar(255)",
        ColumnType.TEXT: "blob sub_type text",
        ColumnType.SMALLINT: "smallint",
        ColumnType.INTEGER: "integer",
        ColumnType.BIGINT: "integer",
        ColumnType.FLOAT: "float",
        ColumnType.DECIMAL: "decimal",
        ColumnType.DATETIME: "timestamp",
        ColumnType.TIMESTAMP: "timestamp",
        ColumnType.TIME: "time",
        ColumnType.DATE: "timestamp",
        ColumnType.BINARY: "blob",
        ColumnType.BOOLEAN: "smallint",
        ColumnType.MONEY: "decimal(19,4)",
    }
)

STRING_TYPES = frozenset({ColumnType.STRING, ColumnType.TEXT})

_SIZED_RE = re.compile(r"^(\w+)\((.+?)\)(.*)$", re.DOTALL)
_MODIFIED_RE = re.compile(r"^(\w+)(\s+.*)$", re.DOTALL)
_SIZE_RE = re.compile(r"\(.+\)")


def _lookup(name: str) -> str | None:
    try:
        return TYPE_MAP[ColumnType(name)]
    except ValueError:
        return None


def get_column_type(column_type: ColumnType | str) -> str:
    """
    Convert an abstract column type into a Firebird column definition.

    ``string(100)`` overrides the mapped size, ``string NOT NULL`` keeps the
    trailing modifiers. Strings that do not start with an abstract type are
    returned unchanged.
    """
    if isinstance(column_type, ColumnType):
        return TYPE_MAP[column_type]

    physical = _lookup(column_type)
    if physical is not None:
        return physical

    match = _SIZED_RE.match(column_type)
    if match:
        base = _lookup(match.group(1))
        if base is not None:
            size = f"({match.group(2)})"
            if "(" in base:
                return _SIZE_RE.sub(lambda _: size, base, count=1) + match.group(3)
            return base + size + match.group(3)

    match = _MODIFIED_RE.match(column_type)
    if match:
        base = _lookup(match.group(1))
        if base is not None:
            return base + match.group(2)

    return column_type
