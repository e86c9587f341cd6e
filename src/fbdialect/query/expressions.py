"""
Raw SQL expression values spliced verbatim into generated statements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def normalize_param_name(name: str) -> str:
    """Strip the leading colon so names match DB-API ``named`` mappings."""
    return name[1:] if name.startswith(":") else name


@dataclass(frozen=True)
class RawExpression:
    """
    Caller-trusted SQL fragment carrying its own named parameters.

    The fragment is inserted as-is; values in ``params`` are bound without
    any column type casting.
    """

    sql: str
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {normalize_param_name(str(name)): value for name, value in self.params.items()}
        object.__setattr__(self, "params", normalized)

    def __str__(self) -> str:
        return self.sql
