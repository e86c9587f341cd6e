"""
Query construction APIs for fbdialect.
"""

from .builder import Query, QueryBuilder
from .expressions import RawExpression
from .insert import BoundStatement, InsertCommandBuilder

__all__ = ["BoundStatement", "InsertCommandBuilder", "Query", "QueryBuilder", "RawExpression"]
