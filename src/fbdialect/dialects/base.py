"""
Dialect strategy interfaces describing SQL compilation behaviors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_returning: bool = False
    supports_limit_offset: bool = True


class Dialect(Protocol):
    """
    Strategy interface consumed across query and adapter layers.
    """

    @property
    def name(self) -> str: ...

    @property
    def param_style(self) -> str: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    def rewrite_pagination(self, sql: str, limit: int | None, offset: int | None) -> str: ...

    def apply_limit(self, sql: str, limit: int | None, offset: int | None) -> str: ...

    def parameter_placeholder(self, position: int | None = None) -> str: ...

    def parameter_name(self, position: int) -> str: ...

    def returning_clause(self, column: str) -> str: ...

    def column_type(self, column_type: str) -> str: ...
