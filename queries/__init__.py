"""
===============================================
Named SQL queries: loading, binding, editing.
===============================================

This package loads named SQL statements from query files, binds ':name'
parameters and performs simple structural edits on SELECT statements.

The package follows a clear organization:
    - query_store.py: Query file parsing, normalization and per-path cache
    - binder.py: Placeholder substitution and SQLAlchemy text() binding
    - statement_editor.py: SELECT column / WHERE replacement via sqlglot
    - exceptions.py: Error types shared by the modules above
    - resources/: Query files packaged with the library

Example:
    >>> from queries import default_store
    >>>
    >>> default_store.load('example_queries.sql')
    >>> sql = default_store.get_query('get_user_by_id', {'id': 42})
    >>> sql
    'SELECT id, username, email, first_name, last_name, created_at FROM users WHERE id = 42'
"""

__version__ = "0.1.0"
__all__ = [
    # Query store
    'QueryStore', 'default_store', 'normalize_sql', 'parse_named_queries',
    # Binding
    'bind_parameters', 'render_literal', 'find_placeholders', 'to_text_clause',
    # Statement editing
    'replace_columns', 'replace_where', 'parse_select', 'build_conditions',
    # Exceptions
    'NamedQueryError', 'QueryLoadError', 'NoActiveFileError', 'QueryNotFoundError',
    'SQLParseError', 'NotASelectError', 'ParameterBindingError'
]

from .exceptions import (
    NamedQueryError,
    NoActiveFileError,
    NotASelectError,
    ParameterBindingError,
    QueryLoadError,
    QueryNotFoundError,
    SQLParseError,
)
from .binder import bind_parameters, find_placeholders, render_literal, to_text_clause
from .statement_editor import build_conditions, parse_select, replace_columns, replace_where
from .query_store import QueryStore, default_store, normalize_sql, parse_named_queries
