"""
Generic SELECT rendering followed by Firebird-specific rewriting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence, Tuple

from ..dialects.base import Dialect
from ..dialects.firebird import FirebirdDialect
from ..dialects.pagination import has_limit, has_offset
from ..schema import SchemaRegistry, TableSchema
from ..utils import get_logger
from .expressions import RawExpression
from .insert import BoundStatement, InsertCommandBuilder


@dataclass
class Query:
    """
    Dialect-neutral SELECT description.

    ``limit``/``offset`` of ``None`` (or a negative number) mean no constraint.
    """

    from_: str
    select: Sequence[str | RawExpression] = ("*",)
    where: str | RawExpression | None = None
    params: dict[str, Any] = field(default_factory=dict)
    order_by: Sequence[str] = ()
    distinct: bool = False
    limit: int | None = None
    offset: int | None = None


class QueryBuilder:
    """
    Build SELECT and INSERT statements for Firebird.

    SELECTs are first rendered with conventional ``LIMIT``/``OFFSET`` and then
    handed to the dialect for pagination rewriting.
    """

    def __init__(
        self,
        dialect: Dialect | None = None,
        *,
        schema: SchemaRegistry | None = None,
        warn_on_skipped: bool | None = None,
    ) -> None:
        self.dialect: Dialect = dialect or FirebirdDialect()
        self.schema = schema
        self.inserts = InsertCommandBuilder(
            schema, dialect=self.dialect, warn_on_skipped=warn_on_skipped
        )
        self.logger = get_logger("query.builder")

    def build(
        self, query: Query, params: Mapping[str, Any] | None = None
    ) -> Tuple[str, dict[str, Any]]:
        sql, merged = self.build_generic(query, params)
        if not self.dialect.capabilities.supports_limit_offset:
            sql = self.dialect.rewrite_pagination(sql, query.limit, query.offset)
        self.logger.debug("SELECT built", extra={"sql": sql})
        return sql, merged

    def build_generic(
        self, query: Query, params: Mapping[str, Any] | None = None
    ) -> Tuple[str, dict[str, Any]]:
        merged: dict[str, Any] = dict(params or {})
        merged.update(query.params)

        select_parts: List[str] = []
        for column in query.select:
            if isinstance(column, RawExpression):
                merged.update(column.params)
            select_parts.append(str(column))

        keyword = "SELECT DISTINCT" if query.distinct else "SELECT"
        sql_parts: List[str] = [keyword, ", ".join(select_parts) or "*", "FROM", query.from_]

        if query.where:
            if isinstance(query.where, RawExpression):
                merged.update(query.where.params)
            sql_parts.extend(["WHERE", str(query.where)])

        if query.order_by:
            sql_parts.extend(["ORDER BY", ", ".join(self._compile_ordering(o) for o in query.order_by)])

        if has_limit(query.limit):
            sql_parts.append(f"LIMIT {int(query.limit)}")
        if has_offset(query.offset):
            sql_parts.append(f"OFFSET {int(query.offset)}")

        return " ".join(sql_parts), merged

    def apply_limit(self, sql: str, limit: int | None, offset: int | None) -> str:
        return self.dialect.apply_limit(sql, limit, offset)

    def get_column_type(self, column_type: str) -> str:
        return self.dialect.column_type(column_type)

    def create_insert_command(
        self, table: TableSchema | str, data: Mapping[str, Any]
    ) -> BoundStatement:
        return self.inserts.create_insert_command(table, data)

    def last_insert_id(self) -> Any:
        return self.inserts.last_insert_id()

    @staticmethod
    def _compile_ordering(field_name: str) -> str:
        if field_name.startswith("-"):
            return f"{field_name[1:]} DESC"
        return field_name
