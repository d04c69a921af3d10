"""
===========================================================
Comprehensive pytest suite for queries/statement_editor.py
===========================================================

Sections:
---------
1. Unit tests - column and WHERE replacement
2. Edge case tests - no-op inputs, invalid SQL, non-SELECT statements
3. Regression tests - round trip through the parser

Available markers:
------------------
unit, edge_case, regression

How to Execute:
---------------
All tests:          pytest tests/tests_queries/test_statement_editor.py -v
"""

from datetime import datetime
from unittest.mock import patch

import pytest
from sqlglot import exp, parse_one

from queries.exceptions import NotASelectError, SQLParseError
from queries.statement_editor import build_conditions, parse_select, replace_columns, replace_where

# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_replace_columns():
    sql = "SELECT * FROM users WHERE status = 'active'"

    result = replace_columns(sql, ["id", "username", "last_login_date"])

    assert result == "SELECT id, username, last_login_date FROM users WHERE status = 'active'"


@pytest.mark.unit
def test_replace_columns_keeps_order_by():
    sql = "SELECT id, name FROM users ORDER BY name DESC"

    assert replace_columns(sql, ["email"]) == "SELECT email FROM users ORDER BY name DESC"


@pytest.mark.unit
def test_replace_where_adds_conjunction():
    sql = "SELECT id, name, email FROM users"

    result = replace_where(sql, {"status": "active", "department_id": 5})

    assert result == "SELECT id, name, email FROM users WHERE status = 'active' AND department_id = 5"


@pytest.mark.unit
def test_replace_where_discards_existing_clause():
    sql = "SELECT id, name FROM users WHERE status = 'active'"

    result = replace_where(sql, {"id": 100, "department_id": 5})

    assert "id = 100" in result
    assert "department_id = 5" in result
    assert "status" not in result


@pytest.mark.unit
def test_build_conditions_is_left_nested():
    condition = build_conditions({"a": 1, "b": "x", "c": 2})

    assert isinstance(condition, exp.And)
    assert isinstance(condition.this, exp.And)
    assert condition.sql() == "a = 1 AND b = 'x' AND c = 2"


@pytest.mark.unit
def test_build_conditions_empty():
    assert build_conditions({}) is None


@pytest.mark.unit
def test_parse_select_returns_select():
    assert isinstance(parse_select("SELECT id FROM users"), exp.Select)


# ====================
# 2. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
@pytest.mark.parametrize("columns", [[], None])
def test_replace_columns_noop_skips_parser(columns):
    sql = "definitely not SQL"

    with patch("queries.statement_editor.parse_one") as mock_parse:
        assert replace_columns(sql, columns) is sql

    mock_parse.assert_not_called()


@pytest.mark.edge_case
@pytest.mark.parametrize("conditions", [{}, None])
def test_replace_where_noop_skips_parser(conditions):
    sql = "definitely not SQL"

    with patch("queries.statement_editor.parse_one") as mock_parse:
        assert replace_where(sql, conditions) is sql

    mock_parse.assert_not_called()


@pytest.mark.edge_case
def test_empty_sql_is_returned_unchanged():
    assert replace_columns(None, ["id"]) is None
    assert replace_where("", {"id": 1}) == ""


@pytest.mark.edge_case
@pytest.mark.parametrize("sql", [
    "UPDATE users SET name = 'x' WHERE id = 1",
    "INSERT INTO users (name) VALUES ('John')",
    "DELETE FROM users WHERE id = 1",
])
def test_non_select_raises(sql):
    with pytest.raises(NotASelectError):
        replace_columns(sql, ["id"])
    with pytest.raises(NotASelectError):
        replace_where(sql, {"id": 1})


@pytest.mark.edge_case
def test_union_is_not_a_plain_select():
    with pytest.raises(NotASelectError):
        replace_where("SELECT id FROM a UNION SELECT id FROM b", {"id": 1})


@pytest.mark.edge_case
def test_invalid_sql_raises_parse_error():
    with pytest.raises(SQLParseError) as exc_info:
        replace_columns("SELECT * FROM users WHERE (id = 1", ["id"])

    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.__cause__ is not None


@pytest.mark.edge_case
def test_none_condition_value_raises():
    with pytest.raises(TypeError):
        replace_where("SELECT id FROM users", {"deleted_at": None})


@pytest.mark.edge_case
@pytest.mark.parametrize("value", [True, datetime(2024, 1, 1), [1]])
def test_non_numeric_condition_value_raises(value):
    with pytest.raises(TypeError):
        build_conditions({"flag": value})


# ====================
# 3. REGRESSION TESTS
# ====================

@pytest.mark.regression
def test_replace_where_round_trip():
    """Re-parsing the output yields exactly the built conjunction as WHERE."""
    conditions = {"status": "active", "department_id": 5, "name": "O'Connor"}

    result = replace_where("SELECT id, name FROM users", conditions)
    where = parse_one(result).args["where"]

    assert where.this.sql() == build_conditions(conditions).sql()
