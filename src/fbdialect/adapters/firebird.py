"""
Firebird database adapter implementation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from ..dialects.firebird import FirebirdDialect
from ..security.redaction import redact_params
from ..utils import get_logger, resolve_slow_query_ms, time_call
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
)

# Quoted literals and identifiers are matched first so placeholders inside them survive.
_PLACEHOLDER_RE = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|(?<![:\w]):([A-Za-z_]\w*)"
    r"|(\?)"
)

_EXECUTE_BLOCK_RE = re.compile(r"^\s*EXECUTE\s+BLOCK\b", re.IGNORECASE)
_BLOCK_TOKEN_RE = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|(\()|(\))|\b(AS)\b",
    re.IGNORECASE,
)


def _load_driver():
    try:
        from firebird import driver

        return driver
    except ImportError:
        return None


def _split_block_body(sql: str) -> tuple[str, str]:
    """
    Split an ``EXECUTE BLOCK`` into its parameter header and PSQL body.

    Only the header takes bind parameters; ``:var`` in the body refers to
    block variables. Other statements are returned whole as the header.
    """
    if not _EXECUTE_BLOCK_RE.match(sql):
        return sql, ""
    depth = 0
    for match in _BLOCK_TOKEN_RE.finditer(sql):
        if match.group(1):
            depth += 1
        elif match.group(2):
            depth -= 1
        elif match.group(3) and depth == 0:
            return sql[: match.start()], sql[match.start() :]
    return sql, ""


def to_qmark(
    sql: str, params: Mapping[str, Any] | Sequence[Any] | None
) -> tuple[str, tuple[Any, ...]]:
    """
    Rewrite ``:name`` placeholders to ``?`` and order the values to match.

    Positional parameter sequences are validated against the ``?`` count and
    passed through. In ``EXECUTE BLOCK`` statements only the input parameter
    header is scanned.
    """
    if params is None:
        params = ()

    header, body = _split_block_body(sql)

    if not isinstance(params, Mapping):
        values = tuple(params)
        expected = sum(1 for m in _PLACEHOLDER_RE.finditer(header) if m.group(2))
        if expected != len(values):
            raise AdapterExecutionError(
                f"Parameter count mismatch: expected {expected}, received {len(values)}."
            )
        return sql, values

    ordered: list[Any] = []

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if match.group(2):
            raise AdapterExecutionError("Mixed positional and named placeholders are not supported.")
        if name is None:
            return match.group(0)
        if name not in params:
            raise AdapterExecutionError(f"No value bound for parameter ':{name}'.")
        ordered.append(params[name])
        return "?"

    converted = _PLACEHOLDER_RE.sub(replace, header)
    return converted + body, tuple(ordered)


@dataclass
class FirebirdConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


class FirebirdAdapter(DatabaseAdapter):
    """
    Adapter wrapping the firebird-driver DB-API module.

    Statements may use named ``:name`` parameters with a mapping; they are
    converted to the driver's qmark style before execution.
    """

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self.dialect = FirebirdDialect()
        self._state: FirebirdConnectionState | None = None
        self.logger = get_logger("adapters.firebird")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    # ------------------------------------------------------------------ #
    # Connection management
    # ------------------------------------------------------------------ #
    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("firebird-driver is required to use FirebirdAdapter.")

        options = dict(config.options or {})
        for key in ("user", "password", "role", "charset"):
            value = getattr(config, key)
            if value is not None:
                options.setdefault(key, value)

        database = config.database()
        self.logger.info(
            "Connecting to Firebird %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )

        try:
            connection = driver.connect(database, **options)
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to Firebird.") from exc

        self._state = FirebirdConnectionState(connection, config, driver)
        return connection

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    def _ensure_connection(self) -> Any:
        if not self._state:
            raise AdapterConnectionError("FirebirdAdapter is not connected.")
        conn = self._state.connection
        is_closed = getattr(conn, "is_closed", None)
        if callable(is_closed) and is_closed():
            self.logger.warning("Firebird connection closed; reconnecting.")
            conn = self.connect(self._state.config)
        return conn

    @property
    def autocommit(self) -> bool:
        return bool(self._state and self._state.config.autocommit)

    # ------------------------------------------------------------------ #
    # Execution helpers
    # ------------------------------------------------------------------ #
    def execute(self, sql: str, params: Mapping[str, Any] | Sequence[Any] | None = None) -> Any:
        connection = self._ensure_connection()
        converted, values = to_qmark(sql, params)
        cursor = connection.cursor()
        with time_call(
            "firebird.execute",
            self.logger,
            sql=converted,
            params=redact_params(params),
            threshold_ms=self.slow_query_ms,
        ):
            cursor.execute(converted, values)
        if self.autocommit:
            # Cursors must stay open for RETURNING rows to be fetched.
            connection.commit(retaining=True)
        return cursor

    def executemany(
        self,
        sql: str,
        seq_of_params: Sequence[Mapping[str, Any] | Sequence[Any]]
        | Iterable[Mapping[str, Any] | Sequence[Any]],
    ) -> Any:
        connection = self._ensure_connection()
        converted_sql = sql
        batch: list[tuple[Any, ...]] = []
        for params in seq_of_params:
            converted_sql, values = to_qmark(sql, params)
            batch.append(values)
        cursor = connection.cursor()
        with time_call(
            "firebird.executemany",
            self.logger,
            sql=converted_sql,
            params="bulk",
            threshold_ms=self.slow_query_ms,
        ):
            cursor.executemany(converted_sql, batch)
        if self.autocommit:
            connection.commit(retaining=True)
        return cursor

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def begin(self) -> None:
        if self.autocommit:
            return
        connection = self._ensure_connection()
        try:
            connection.begin()
        except Exception as exc:
            raise AdapterTransactionError("Failed to start Firebird transaction.") from exc

    def commit(self) -> None:
        connection = self._ensure_connection()
        connection.commit()

    def rollback(self) -> None:
        connection = self._ensure_connection()
        connection.rollback()

    # ------------------------------------------------------------------ #
    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        row = cursor.fetchone()
        if not row:
            return None
        return row[0]
