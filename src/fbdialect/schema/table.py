"""
Table and column metadata consumed by the query layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from .types import STRING_TYPES, ColumnType

_INTEGER_TYPES = frozenset(
    {ColumnType.PK, ColumnType.BIGPK, ColumnType.SMALLINT, ColumnType.INTEGER, ColumnType.BIGINT}
)
_DECIMAL_TYPES = frozenset({ColumnType.DECIMAL, ColumnType.MONEY})


class SchemaError(Exception):
    """Raised when a table or column cannot be resolved."""


def _to_bool_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "t", "1"}:
            return 1
        if lowered in {"false", "f", "0"}:
            return 0
    if isinstance(value, (int, float)):
        return int(bool(value))
    raise ValueError(f"Invalid boolean value '{value}'")


@dataclass
class ColumnSchema:
    """
    Metadata for a single column.

    ``raw_name`` is the identifier as it appears in generated SQL and
    defaults to ``name``.
    """

    name: str
    type: ColumnType = ColumnType.STRING
    allow_null: bool = True
    raw_name: str = ""

    def __post_init__(self) -> None:
        self.type = ColumnType(self.type)
        if not self.raw_name:
            self.raw_name = self.name

    @property
    def is_string(self) -> bool:
        return self.type in STRING_TYPES

    def typecast(self, value: Any) -> Any:
        """
        Convert a Python value into the form bound for this column.

        An empty string on a non-text column means NULL, which only nullable
        columns accept.
        """
        if value is None:
            return None
        if value == "" and not self.is_string and self.type is not ColumnType.BINARY:
            if self.allow_null:
                return None
            raise ValueError(f"Column '{self.name}' does not accept an empty value")
        try:
            if self.type in _INTEGER_TYPES:
                return value if isinstance(value, int) and not isinstance(value, bool) else int(value)
            if self.type is ColumnType.BOOLEAN:
                return _to_bool_int(value)
            if self.type is ColumnType.FLOAT:
                return float(value)
            if self.type in _DECIMAL_TYPES:
                return value if isinstance(value, Decimal) else Decimal(str(value))
        except (TypeError, ValueError, InvalidOperation) as exc:
            raise ValueError(
                f"Invalid value {value!r} for column '{self.name}' of type {self.type.value}"
            ) from exc
        if self.is_string:
            return str(value)
        return value


@dataclass
class TableSchema:
    """
    Metadata for one table: its columns and primary key.

    ``primary_key`` is a column name, or a tuple of names for composite keys.
    ``sequence_name`` records the column whose generated value the last insert
    returned.
    """

    name: str
    columns: dict[str, ColumnSchema] = field(default_factory=dict)
    primary_key: str | tuple[str, ...] | None = None
    raw_name: str = ""
    sequence_name: str | None = None

    def __post_init__(self) -> None:
        if not self.raw_name:
            self.raw_name = self.name
        if isinstance(self.primary_key, list):
            self.primary_key = tuple(self.primary_key)

    @classmethod
    def build(
        cls,
        name: str,
        columns: Iterable[ColumnSchema],
        *,
        primary_key: str | Iterable[str] | None = None,
        raw_name: str = "",
    ) -> "TableSchema":
        pk = primary_key if primary_key is None or isinstance(primary_key, str) else tuple(primary_key)
        return cls(
            name=name,
            columns={column.name: column for column in columns},
            primary_key=pk,
            raw_name=raw_name,
        )

    def get_column(self, name: str) -> ColumnSchema | None:
        return self.columns.get(name)

    @property
    def primary_key_columns(self) -> tuple[str, ...]:
        if self.primary_key is None:
            return ()
        if isinstance(self.primary_key, str):
            return (self.primary_key,)
        return tuple(self.primary_key)

    @property
    def single_primary_key(self) -> str | None:
        """The primary key column name when the key is declared as one column."""
        return self.primary_key if isinstance(self.primary_key, str) else None


class SchemaRegistry:
    """
    In-memory lookup from table name to ``TableSchema``.
    """

    def __init__(self, tables: Iterable[TableSchema] | Mapping[str, TableSchema] = ()) -> None:
        self._tables: dict[str, TableSchema] = {}
        values = tables.values() if isinstance(tables, Mapping) else tables
        for table in values:
            self.add(table)

    def add(self, table: TableSchema) -> TableSchema:
        self._tables[table.name] = table
        return table

    def get_table(self, name: str) -> TableSchema:
        try:
            return self._tables[name]
        except KeyError:
            raise SchemaError(f"Table '{name}' does not exist.") from None

    def resolve(self, table: TableSchema | str) -> TableSchema:
        if isinstance(table, TableSchema):
            return table
        return self.get_table(table)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def table_names(self) -> list[str]:
        return list(self._tables)
