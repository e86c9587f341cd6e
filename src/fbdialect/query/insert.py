"""
INSERT statement construction with ``RETURNING`` for generated keys.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from ..dialects.base import Dialect
from ..dialects.firebird import FirebirdDialect
from ..schema import SchemaError, SchemaRegistry, TableSchema
from ..security.redaction import redact_params
from ..utils import get_logger, resolve_warn_on_skipped
from .expressions import RawExpression, normalize_param_name


class StatementExecutor(Protocol):
    def execute(self, sql: str, params: Any = None) -> Any: ...


class BoundStatement:
    """
    Finalized SQL plus its named parameter bindings.

    When ``returning`` is set, executing the statement yields a single row
    holding the generated primary key. The cursor of the last execution is
    kept so the key can be read back once.
    """

    def __init__(self, sql: str, *, returning: str | None = None) -> None:
        self.sql = sql
        self.returning = returning
        self.params: dict[str, Any] = {}
        self.cursor: Any = None

    def __repr__(self) -> str:
        return f"BoundStatement(sql={self.sql!r}, params={redact_params(self.params)!r})"

    @property
    def has_generated_key(self) -> bool:
        return self.returning is not None

    def bind_value(self, name: str, value: Any) -> "BoundStatement":
        self.params[normalize_param_name(name)] = value
        return self

    def execute(self, executor: StatementExecutor) -> Any:
        """
        Run the statement through an adapter or DB-API connection.
        """
        self.cursor = executor.execute(self.sql, dict(self.params))
        return self.cursor

    def fetch_column(self) -> Any:
        """
        Return the first column of the next result row, or ``None``.
        """
        if self.cursor is None:
            return None
        row = self.cursor.fetchone()
        if not row:
            return None
        return row[0]


class InsertCommandBuilder:
    """
    Builds INSERT statements for Firebird tables.

    Each instance remembers the last statement it built so the generated
    primary key can be read after the caller executes it. Use one builder per
    unit of work; instances are not safe to share between threads.
    """

    def __init__(
        self,
        schema: SchemaRegistry | None = None,
        *,
        dialect: Dialect | None = None,
        warn_on_skipped: bool | None = None,
    ) -> None:
        self.schema = schema
        self.dialect: Dialect = dialect or FirebirdDialect()
        self.warn_on_skipped = resolve_warn_on_skipped(warn_on_skipped)
        self.logger = get_logger("query.insert")
        self._statement: BoundStatement | None = None

    @property
    def last_statement(self) -> BoundStatement | None:
        return self._statement

    def resolve_table(self, table: TableSchema | str) -> TableSchema:
        if isinstance(table, TableSchema):
            return table
        if self.schema is None:
            raise SchemaError(f"Table '{table}' cannot be resolved without a schema registry.")
        return self.schema.resolve(table)

    def create_insert_command(
        self, table: TableSchema | str, data: Mapping[str, Any]
    ) -> BoundStatement:
        table = self.resolve_table(table)
        fields: list[str] = []
        placeholders: list[str] = []
        values: dict[str, Any] = {}
        counter = 0

        for name, value in data.items():
            column = table.get_column(name)
            if column is None:
                self._report_skipped(table, name, "unknown column")
                continue
            if value is None and not column.allow_null:
                self._report_skipped(table, name, "NULL not allowed")
                continue

            fields.append(column.raw_name)
            if isinstance(value, RawExpression):
                placeholders.append(value.sql)
                values.update(value.params)
            else:
                placeholders.append(self.dialect.parameter_placeholder(counter))
                values[self.dialect.parameter_name(counter)] = column.typecast(value)
                counter += 1

        if not fields:
            for pk in table.primary_key_columns:
                column = table.get_column(pk)
                if column is None:
                    raise SchemaError(
                        f"Primary key column '{pk}' is not defined on table '{table.name}'."
                    )
                fields.append(column.raw_name)
                placeholders.append("NULL")

        sql = (
            f"INSERT INTO {table.raw_name} ({', '.join(fields)}) "
            f"VALUES ({', '.join(placeholders)})"
        )

        returning = None
        pk_name = table.single_primary_key
        pk_column = table.get_column(pk_name) if pk_name is not None else None
        if (
            pk_column is not None
            and not pk_column.is_string
            and self.dialect.capabilities.supports_returning
        ):
            returning = pk_column.raw_name
            sql += self.dialect.returning_clause(returning)
            table.sequence_name = returning

        statement = BoundStatement(sql, returning=returning)
        for name, value in values.items():
            statement.bind_value(name, value)

        self._statement = statement
        self.logger.debug(
            "INSERT built for %s",
            table.name,
            extra={"sql": sql, "params": redact_params(statement.params)},
        )
        return statement

    def last_insert_id(self) -> Any:
        """
        Generated primary key of the last built statement, once executed.
        """
        statement = self._statement
        if statement is None or not statement.has_generated_key:
            return None
        return statement.fetch_column()

    def _report_skipped(self, table: TableSchema, name: str, reason: str) -> None:
        self.logger.log(
            logging.WARNING if self.warn_on_skipped else logging.DEBUG,
            "Skipping '%s' in INSERT for %s (%s)",
            name,
            table.name,
            reason,
        )
