"""
Adapter protocol definitions for fbdialect.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from ..dialects.base import Dialect
from ..security.dsns import DSNConfig, parse_dsn
from ..utils.settings import SettingsError, parse_bool


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution or parameter validation fails."""


class AdapterTransactionError(AdapterError):
    """Raised when transaction operations fail."""


def _pop_bool(query: dict[str, str], key: str) -> bool | None:
    if key not in query:
        return None
    try:
        return parse_bool(query.pop(key), key=key)
    except SettingsError as exc:
        raise AdapterConfigurationError(str(exc)) from exc


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for adapters.

    ``url`` is either a ``firebird://`` DSN or a plain database string the
    driver understands (``host/port:/path/db.fdb`` or an alias).
    """

    url: str
    user: str | None = None
    password: str | None = None
    role: str | None = None
    charset: str | None = None
    autocommit: bool = False
    options: dict[str, Any] | None = None
    dsn: DSNConfig | None = None
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a connection config by parsing the DSN string.
        """

        parsed = parse_dsn(dsn)
        query = dict(parsed.query)

        parsed_autocommit = _pop_bool(query, "autocommit")
        parsed_charset = query.pop("charset", None)
        parsed_role = query.pop("role", None)

        options = dict(query)
        options.update(kwargs.pop("options", None) or {})

        autocommit = kwargs.pop("autocommit", parsed_autocommit)
        if autocommit is None:
            autocommit = False

        return cls(
            url=dsn,
            dsn=parsed,
            user=kwargs.pop("user", parsed.username),
            password=kwargs.pop("password", parsed.password),
            role=kwargs.pop("role", parsed_role),
            charset=kwargs.pop("charset", parsed_charset),
            autocommit=autocommit,
            options=options or None,
            **kwargs,
        )

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from an environment variable containing a DSN.
        """

        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    def database(self) -> str:
        """
        The database string handed to the driver.
        """

        if self.dsn is None:
            return self.url
        target = self.dsn.server_database()
        if not target:
            raise AdapterConfigurationError(
                f"DSN {self.redacted_dsn()} does not name a database."
            )
        return target

    def redacted_dsn(self) -> str:
        """
        Return a DSN safe for logging (credentials removed).
        """

        if self.dsn:
            return self.dsn.redacted()
        return self.url

    def descriptive_label(self) -> str:
        """
        Describe the config source for diagnostics.
        """

        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


class DatabaseAdapter(Protocol):
    """
    Adapter interface exposing database operations used by higher layers.
    """

    dialect: Dialect
    slow_query_ms: int

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Establish a connection handle using the supplied configuration.
        """

    def close(self) -> None:
        """
        Close underlying resources. Implementations should be idempotent.
        """

    def execute(self, sql: str, params: Mapping[str, Any] | Sequence[Any] | None = None) -> Any:
        """
        Execute a single SQL statement returning a cursor-like object.
        """

    def executemany(self, sql: str, seq_of_params: Sequence[Mapping[str, Any] | Sequence[Any]]) -> Any:
        """
        Execute a prepared statement against multiple parameter sets.
        """

    def begin(self) -> None:
        """
        Start a transaction.
        """

    def commit(self) -> None:
        """
        Commit the current transaction context.
        """

    def rollback(self) -> None:
        """
        Roll back the current transaction context.
        """

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        """
        Retrieve the primary key value generated by the previous insert.
        """
