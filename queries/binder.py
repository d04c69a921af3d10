"""
=========================================
Named parameter binding for SQL text.
=========================================

Replaces ``:name`` placeholders with SQL literals, or hands them to SQLAlchemy
as bound parameters.

Literal binding rules:
    - str values are wrapped in single quotes, embedded quotes doubled
      (O'Connor -> 'O''Connor'); no other escaping is done
    - numbers are rendered with str() and left unquoted
    - every occurrence of ``:name`` is replaced, as a plain substring match
    - substitution is a single pass, so a value that itself contains
      ``:something`` is never substituted again

Binding is lenient by default: parameters without a placeholder and
placeholders without a parameter are both ignored. strict=True reports them.

Example:
    >>> from queries.binder import bind_parameters
    >>>
    >>> bind_parameters("SELECT * FROM users WHERE name = :name", {'name': "O'Connor"})
    "SELECT * FROM users WHERE name = 'O''Connor'"
"""

import logging
import numbers
import re
from typing import Any, List, Mapping, Optional

from sqlalchemy import TextClause, text

from queries.exceptions import ParameterBindingError

logger = logging.getLogger(__name__)

PLACEHOLDER_MARKER = ':'

# ':name' not preceded by another ':' or a word character (skips '::type' casts)
PLACEHOLDER_PATTERN = re.compile(r'(?<![:\w]):([A-Za-z_]\w*)')


def render_literal(value: Any) -> str:
    """
    Render a parameter value as a SQL literal.

    Args:
        value: str or numeric value

    Returns:
        Quoted string literal or the value's decimal text

    Raises:
        TypeError: If value is neither a str nor a number (bool included)
    """
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise TypeError(f"Cannot render {type(value).__name__} as a SQL literal")
    return str(value)


def find_placeholders(sql: str) -> List[str]:
    """
    List the distinct placeholder names in SQL text, in order of appearance.

    Args:
        sql: SQL text

    Returns:
        Placeholder names without the ':' marker
    """
    if not sql:
        return []
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(sql)))


def bind_parameters(
    sql: str,
    params: Optional[Mapping[str, Any]],
    strict: bool = False
) -> str:
    """
    Substitute named placeholders with literal values.

    Args:
        sql: SQL text containing ':name' placeholders
        params: Mapping of placeholder name (without ':') to value
        strict: Raise when a parameter is unused or a placeholder is left over

    Returns:
        SQL text with placeholders replaced; sql itself when params is empty

    Raises:
        ParameterBindingError: In strict mode, on unused or unresolved names
        TypeError: If a value is neither a str nor a number
    """
    if not params:
        if strict and find_placeholders(sql):
            raise ParameterBindingError(unresolved=find_placeholders(sql))
        return sql

    replacements = {
        f"{PLACEHOLDER_MARKER}{name}": render_literal(value)
        for name, value in params.items()
    }

    # Longest token first so ':identifier' is not consumed by ':id'
    tokens = sorted(replacements, key=len, reverse=True)
    pattern = re.compile('|'.join(re.escape(token) for token in tokens))

    matched = set()

    def _substitute(match):
        token = match.group(0)
        matched.add(token)
        return replacements[token]

    bound = pattern.sub(_substitute, sql)

    if strict:
        unused = [token[1:] for token in replacements if token not in matched]
        # Scan the original text with tokens blanked out, not the bound output
        unresolved = find_placeholders(pattern.sub(' ', sql))
        if unused or unresolved:
            logger.error(f"Strict binding failed: unused={unused}, unresolved={unresolved}")
            raise ParameterBindingError(unused=unused, unresolved=unresolved)

    logger.debug(f"Bound {len(matched)} of {len(replacements)} parameters")
    return bound


def to_text_clause(sql: str, params: Optional[Mapping[str, Any]] = None) -> TextClause:
    """
    Wrap SQL text in a SQLAlchemy TextClause with driver-side bound parameters.

    The ':name' placeholder syntax of named query files is the syntax
    sqlalchemy.text() understands, so values are passed to the driver
    instead of being rendered into the SQL.

    Args:
        sql: SQL text containing ':name' placeholders
        params: Mapping of placeholder name to value

    Returns:
        TextClause ready for Connection.execute()

    Raises:
        sqlalchemy.exc.ArgumentError: If a parameter has no placeholder
    """
    clause = text(sql)
    if params:
        clause = clause.bindparams(**params)
    return clause
