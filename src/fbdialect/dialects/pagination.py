"""
Pagination rewriting for Firebird.

Firebird has no ``LIMIT``/``OFFSET``. A row cap and a row skip are written
right after the leading keyword (``SELECT FIRST n SKIP m ...``), or as a
trailing 1-indexed inclusive range (``... ROWS a TO b``). Both entry points
work on rendered SQL text and leave anything that does not start with
``SELECT`` untouched.
"""

from __future__ import annotations

import re

from ..utils import get_logger

_LIMIT_RE = re.compile(r"\s*\bLIMIT\s+\d+", re.IGNORECASE)
_OFFSET_RE = re.compile(r"\s*\bOFFSET\s+\d+", re.IGNORECASE)
_SELECT_RE = re.compile(r"^SELECT\s+", re.IGNORECASE)

logger = get_logger("query.pagination")


def has_limit(limit: int | None) -> bool:
    return limit is not None and int(limit) >= 0


def has_offset(offset: int | None) -> bool:
    return offset is not None and int(offset) >= 0


def strip_limit_offset(sql: str) -> str:
    """
    Remove the first generic ``LIMIT <n>`` and ``OFFSET <n>`` fragments.

    Only the first match of each is removed so string literals further in the
    statement that happen to look alike are not touched.
    """
    sql = _LIMIT_RE.sub("", sql, count=1)
    return _OFFSET_RE.sub("", sql, count=1)


def _prefix_select(sql: str, directive: str) -> str:
    return _SELECT_RE.sub(lambda _: f"SELECT {directive} ", sql, count=1)


def rewrite_pagination(sql: str, limit: int | None, offset: int | None) -> str:
    """
    Move generic ``LIMIT``/``OFFSET`` semantics to ``FIRST``/``SKIP``.

    ``None`` or a negative value means "no constraint".

    >>> rewrite_pagination("SELECT a,b FROM t LIMIT 10 OFFSET 5", 10, 5)
    'SELECT FIRST 10 SKIP 5 a,b FROM t'
    """
    with_limit = has_limit(limit)
    with_offset = has_offset(offset)
    if not with_limit and not with_offset:
        return sql
    if not _SELECT_RE.match(sql):
        logger.debug("Pagination skipped for non-SELECT statement", extra={"sql": sql})
        return sql

    if with_limit and with_offset:
        directive = f"FIRST {int(limit)} SKIP {int(offset)}"
    elif with_limit:
        directive = f"FIRST {int(limit)}"
    else:
        directive = f"SKIP {int(offset)}"
    return _prefix_select(strip_limit_offset(sql), directive)


def apply_limit(sql: str, limit: int | None, offset: int | None) -> str:
    """
    Apply a row cap and row skip to SQL that carries no pagination yet.

    A negative (or ``None``) ``limit``/``offset`` is ignored. An offset on its
    own can only be expressed with ``SKIP`` since ``ROWS`` needs an upper
    bound; everything else becomes a trailing ``ROWS`` range.

    >>> apply_limit("SELECT * FROM T", 10, 5)
    'SELECT * FROM T ROWS 6 TO 15'
    """
    limit = int(limit) if limit is not None else -1
    offset = int(offset) if offset is not None else -1

    if offset < 0 and limit < 0:
        return sql

    if offset >= 0 and limit < 0:
        if not _SELECT_RE.match(sql):
            logger.debug("SKIP not applied to non-SELECT statement", extra={"sql": sql})
            return sql
        return _prefix_select(sql, f"SKIP {offset}")

    if offset < 0 and limit >= 0:
        return f"{sql} ROWS {limit}"

    if offset >= 0 and limit >= 0:
        return f"{sql} ROWS {offset + 1} TO {offset + limit}"

    return sql
