import pytest

from fbdialect.dialects import apply_limit, rewrite_pagination, strip_limit_offset


def test_rewrite_limit_and_offset_moves_directive_after_select():
    sql = rewrite_pagination("SELECT a,b FROM t LIMIT 10 OFFSET 5", 10, 5)
    assert sql == "SELECT FIRST 10 SKIP 5 a,b FROM t"


def test_rewrite_limit_only():
    sql = rewrite_pagination("SELECT * FROM t WHERE x = 1 LIMIT 3", 3, None)
    assert sql == "SELECT FIRST 3 * FROM t WHERE x = 1"


def test_rewrite_offset_only():
    sql = rewrite_pagination("SELECT * FROM t OFFSET 7", None, 7)
    assert sql == "SELECT SKIP 7 * FROM t"


def test_rewrite_without_pagination_is_identity():
    sql = "SELECT * FROM t LIMIT 5"
    assert rewrite_pagination(sql, None, None) == sql


def test_rewrite_treats_negative_values_as_absent():
    sql = "SELECT * FROM t"
    assert rewrite_pagination(sql, -1, -1) == sql
    assert rewrite_pagination(sql, 4, -1) == "SELECT FIRST 4 * FROM t"


def test_rewrite_is_case_insensitive():
    sql = rewrite_pagination("select * from t limit 10 offset 5", 10, 5)
    assert sql == "SELECT FIRST 10 SKIP 5 * from t"


def test_rewrite_places_directive_before_distinct():
    sql = rewrite_pagination("SELECT DISTINCT city FROM users LIMIT 2", 2, None)
    assert sql == "SELECT FIRST 2 DISTINCT city FROM users"


def test_rewrite_leaves_non_select_statements_alone():
    sql = "UPDATE t SET a = 1 LIMIT 5"
    assert rewrite_pagination(sql, 5, None) == sql


def test_rewrite_keeps_clauses_after_stripped_fragments():
    sql = rewrite_pagination("SELECT id FROM t ORDER BY id LIMIT 5 OFFSET 10 FOR UPDATE", 5, 10)
    assert sql == "SELECT FIRST 5 SKIP 10 id FROM t ORDER BY id FOR UPDATE"


@pytest.mark.parametrize(("limit", "offset"), [(0, 0), (1, 0), (10, 5), (250, 1000)])
def test_rewrite_contains_requested_values_and_no_generic_fragments(limit, offset):
    base = f"SELECT id FROM users ORDER BY id LIMIT {limit} OFFSET {offset}"
    sql = rewrite_pagination(base, limit, offset)
    assert sql.startswith(f"SELECT FIRST {limit} SKIP {offset} id")
    assert "LIMIT" not in sql.upper()
    assert "OFFSET" not in sql.upper()


def test_strip_limit_offset_removes_first_match_only():
    sql = strip_limit_offset("SELECT a FROM t LIMIT 1 LIMIT 2")
    assert sql == "SELECT a FROM t LIMIT 2"


def test_apply_limit_ignored_values_return_sql_unchanged():
    sql = "SELECT * FROM T"
    assert apply_limit(sql, -1, -1) == sql
    assert apply_limit(sql, None, None) == sql


def test_apply_limit_offset_only_uses_skip():
    sql = apply_limit("SELECT * FROM T", -1, 5)
    assert sql == "SELECT SKIP 5 * FROM T"
    assert "ROWS" not in sql


def test_apply_limit_skip_touches_only_leading_select():
    sql = apply_limit("SELECT * FROM (SELECT id FROM t) x", -1, 3)
    assert sql == "SELECT SKIP 3 * FROM (SELECT id FROM t) x"


def test_apply_limit_limit_only_appends_rows():
    sql = apply_limit("SELECT * FROM T", 10, -1)
    assert sql == "SELECT * FROM T ROWS 10"


def test_apply_limit_range_is_one_indexed_and_inclusive():
    assert apply_limit("SELECT * FROM T", 10, 5) == "SELECT * FROM T ROWS 6 TO 15"
    assert apply_limit("SELECT * FROM T", 1, 0) == "SELECT * FROM T ROWS 1 TO 1"


def test_apply_limit_offset_only_on_non_select_is_noop():
    sql = "DELETE FROM T"
    assert apply_limit(sql, -1, 4) == sql
