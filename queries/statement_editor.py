"""
=====================================
Structural editing of SELECT queries.
=====================================

Thin layer over the sqlglot parser for two edits on plain SELECT statements:

- replace_columns: swap the projected column list
- replace_where: replace the WHERE clause with an AND of equalities

Both return their input untouched, without parsing it, when there is
nothing to apply (empty SQL, empty column list or empty condition mapping).

Example:
    >>> from queries.statement_editor import replace_columns, replace_where
    >>>
    >>> replace_columns("SELECT * FROM users", ['id', 'email'])
    'SELECT id, email FROM users'
    >>> replace_where("SELECT id FROM users", {'status': 'active', 'age': 30})
    "SELECT id FROM users WHERE status = 'active' AND age = 30"
"""

import logging
import numbers
from typing import Any, Mapping, Optional, Sequence

from sqlglot import exp, parse_one
from sqlglot.errors import SqlglotError

from core.config import config
from queries.exceptions import NotASelectError, SQLParseError

logger = logging.getLogger(__name__)


def _dialect(dialect: Optional[str]) -> Optional[str]:
    return dialect if dialect is not None else config.query.dialect_or_none


def parse_select(sql: str, dialect: Optional[str] = None) -> exp.Select:
    """
    Parse SQL text that must be a single plain SELECT statement.

    Args:
        sql: SQL text
        dialect: sqlglot dialect name (defaults to config.sql_dialect)

    Returns:
        sqlglot Select expression

    Raises:
        SQLParseError: If the text is not valid SQL
        NotASelectError: If the statement is not a plain SELECT
    """
    try:
        tree = parse_one(sql, dialect=_dialect(dialect))
    except SqlglotError as exc:
        logger.error(f"Failed to parse SQL query: {exc}")
        raise SQLParseError(f"Invalid SQL query: {exc}") from exc

    if not isinstance(tree, exp.Select):
        logger.error("Query is not a SELECT statement")
        raise NotASelectError(f"Query is not a SELECT statement: {sql}")

    return tree


def _literal(value: Any) -> exp.Literal:
    if isinstance(value, str):
        return exp.Literal.string(value)
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise TypeError(f"Cannot compare a column to a {type(value).__name__} value")
    return exp.Literal.number(value)


def build_conditions(conditions: Mapping[str, Any]) -> Optional[exp.Expression]:
    """
    Build ``col1 = v1 AND col2 = v2 ...`` in mapping order.

    Args:
        conditions: Mapping of column name to str or numeric value

    Returns:
        Left-nested conjunction of equality expressions, or None if empty
    """
    condition = None
    for column, value in conditions.items():
        equality = exp.EQ(this=exp.to_column(column), expression=_literal(value))
        condition = equality if condition is None else exp.And(this=condition, expression=equality)
    return condition


def replace_columns(
    sql: str,
    columns: Optional[Sequence[str]],
    dialect: Optional[str] = None
) -> str:
    """
    Replace the projected columns of a SELECT statement.

    Args:
        sql: SELECT statement text
        columns: Column names, rendered as bare identifiers in the given order
        dialect: sqlglot dialect name (defaults to config.sql_dialect)

    Returns:
        Rewritten SQL, or sql unchanged if sql or columns is empty

    Raises:
        SQLParseError: If the text is not valid SQL
        NotASelectError: If the statement is not a plain SELECT
    """
    if not sql or not columns:
        return sql

    tree = parse_select(sql, dialect)
    tree.set('expressions', [exp.to_column(column) for column in columns])

    logger.info("Successfully modified SELECT columns")
    return tree.sql(dialect=_dialect(dialect))


def replace_where(
    sql: str,
    conditions: Optional[Mapping[str, Any]],
    dialect: Optional[str] = None
) -> str:
    """
    Replace the WHERE clause of a SELECT statement with equality conditions.

    Any existing WHERE clause is discarded.

    Args:
        sql: SELECT statement text
        conditions: Mapping of column name to str or numeric value
        dialect: sqlglot dialect name (defaults to config.sql_dialect)

    Returns:
        Rewritten SQL, or sql unchanged if sql or conditions is empty

    Raises:
        SQLParseError: If the text is not valid SQL
        NotASelectError: If the statement is not a plain SELECT
    """
    if not sql or not conditions:
        return sql

    tree = parse_select(sql, dialect)
    tree.set('where', exp.Where(this=build_conditions(conditions)))

    logger.info("Successfully modified WHERE clause")
    return tree.sql(dialect=_dialect(dialect))
