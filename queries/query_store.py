"""
==============================
Named SQL query file store.
==============================

Loads "named query files", normalizes every query they contain and caches
the result per source path.

File format:
    -- name: get_users
    SELECT id, username
    FROM users
    WHERE status = :status;

    -- name: get_user_by_id
    SELECT * FROM users WHERE id = :id;

A marker line starts with ``--`` followed by ``name:`` and a single token.
The query body runs from the next line up to the next marker line or the end
of the file.

Classes:
    QueryStore: Per-path query cache with a current file for name lookups

Functions:
    normalize_sql: Collapse whitespace and drop the trailing ';'
    parse_named_queries: Split file content into {name: normalized SQL}

Example:
    >>> from queries.query_store import QueryStore
    >>>
    >>> store = QueryStore()
    >>> store.load('example_queries.sql')
    >>> store.get_query('get_users', {'status': 'active'})
    "SELECT id, username, email, created_at FROM users WHERE status = 'active' ORDER BY created_at DESC"
"""

import logging
import re
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import TextClause

from core.config import Config, config
from queries import statement_editor
from queries.binder import bind_parameters, to_text_clause
from queries.exceptions import NoActiveFileError, QueryLoadError, QueryNotFoundError
from utils.resource_utils import SQLSourceError, read_sql_source

logger = logging.getLogger(__name__)

STATEMENT_TERMINATOR = ';'

# Default for QueryStore arguments that fall back to core.config
FROM_CONFIG = object()

WHITESPACE_PATTERN = re.compile(r'\s+')

NAMED_QUERY_PATTERN = re.compile(
    r'^--[ \t]*name:[ \t]*(\S+)[ \t]*(?:\r?\n|\Z)(.*?)(?=^--[ \t]*name:[ \t]*\S+[ \t]*\r?$|\Z)',
    re.MULTILINE | re.DOTALL
)


def normalize_sql(sql: Optional[str]) -> Optional[str]:
    """
    Normalize SQL text for caching.

    Every whitespace run becomes a single space, the text is trimmed, and a
    trailing ';' is removed together with the whitespace before it. Only a
    ';' that is the last non-whitespace character is removed, so a ';'
    inside an earlier string literal is kept.

    Args:
        sql: SQL text (None and '' are returned as-is)

    Returns:
        Normalized SQL text
    """
    if not sql:
        return sql

    normalized = WHITESPACE_PATTERN.sub(' ', sql).strip()
    if normalized.endswith(STATEMENT_TERMINATOR):
        normalized = normalized[:-1].rstrip()
    return normalized


def parse_named_queries(content: str) -> Dict[str, str]:
    """
    Extract named queries from file content.

    Args:
        content: Full text of a named query file

    Returns:
        Mapping of query name to normalized SQL; a later duplicate name wins
    """
    queries = {}
    for match in NAMED_QUERY_PATTERN.finditer(content):
        name, body = match.group(1), match.group(2)
        if name in queries:
            logger.warning(f"Duplicate query name '{name}', keeping the last definition")
        sql = normalize_sql(body)
        if not sql:
            logger.warning(f"Query '{name}' has an empty body")
        queries[name] = sql
    return queries


class QueryStore:
    """
    Cache of named queries per query file, with a current file for lookups.

    Loading a path replaces that path's queries as a whole and makes it the
    current file. Queries of previously loaded paths stay cached.

    Attributes:
        resource_package: Package searched for query files before the filesystem
            (config.resource_package unless given; None disables the lookup)
        encoding: Query file encoding

    Example:
        >>> store = QueryStore()
        >>> store.load('/srv/app/sql/reports.sql')
        >>> sql = store.get_by_name('monthly_revenue')
    """

    def __init__(
        self,
        resource_package: Any = FROM_CONFIG,
        encoding: Optional[str] = None
    ):
        self.resource_package = config.resource_package if resource_package is FROM_CONFIG else resource_package
        self.encoding = encoding or config.encoding
        self._queries: Dict[str, Dict[str, str]] = {}
        self._current_path: Optional[str] = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "QueryStore":
        """
        Build a store from configuration and load its default query file.

        Args:
            cfg: Config instance (defaults to the global config)

        Returns:
            QueryStore, with cfg.default_query_file loaded when set
        """
        cfg = cfg or config
        store = cls(resource_package=cfg.resource_package, encoding=cfg.encoding)
        if cfg.default_query_file:
            store.load(cfg.default_query_file)
        return store

    @property
    def current_path(self) -> Optional[str]:
        """Path used by name lookups, or None if none is set."""
        return self._current_path

    @property
    def loaded_paths(self) -> List[str]:
        """Paths with cached queries, in load order."""
        return list(self._queries)

    def load(self, path: Optional[str]) -> None:
        """
        Load and cache all queries of a file, and make it the current file.

        Passing None clears the current file and leaves the cache untouched.

        Args:
            path: Packaged resource name or filesystem path

        Raises:
            QueryLoadError: If the file cannot be read; the cache and the
                current file are left unchanged
        """
        if path is None:
            self.clear_current_path()
            return

        path = str(path)
        try:
            content = read_sql_source(path, package=self.resource_package, encoding=self.encoding)
        except SQLSourceError as exc:
            logger.error(f"Failed to read SQL file: {path}")
            raise QueryLoadError(path) from exc

        queries = parse_named_queries(content)

        with self._lock:
            self._queries[path] = queries
            self._current_path = path

        logger.info(f"Successfully loaded and cached {len(queries)} queries from file: {path}")

    def clear_current_path(self) -> None:
        """Unset the current file; cached queries are kept."""
        with self._lock:
            self._current_path = None
        logger.info("Default SQL file path cleared")

    def get_queries(self, path: Optional[str] = None) -> Dict[str, str]:
        """
        Return a copy of the cached queries of a file.

        Args:
            path: Loaded path (defaults to the current file)

        Returns:
            Mapping of query name to normalized SQL

        Raises:
            NoActiveFileError: If path is None and no file is current
            QueryLoadError: If path was never loaded
        """
        path = path if path is not None else self._current_path
        if path is None:
            raise NoActiveFileError()
        queries = self._queries.get(str(path))
        if queries is None:
            raise QueryLoadError(str(path), f"SQL file not loaded: {path}")
        return dict(queries)

    def get_by_name(self, name: str) -> str:
        """
        Get a query of the current file by name.

        Args:
            name: Query name from a '-- name:' marker

        Returns:
            Cached normalized SQL

        Raises:
            NoActiveFileError: If no file has been loaded
            QueryNotFoundError: If the current file has no such query
        """
        path = self._current_path
        if path is None:
            logger.error("Query lookup attempted before any SQL file was loaded")
            raise NoActiveFileError()

        queries = self._queries[path]
        if name not in queries:
            logger.error(f"Query with name '{name}' not found in file: {path}")
            raise QueryNotFoundError(name, path)

        return queries[name]

    def get_by_name_or_text(self, name_or_text: str) -> str:
        """
        Resolve a query name, falling back to treating the input as SQL.

        Args:
            name_or_text: Query name or literal SQL text

        Returns:
            Cached SQL for a known name, otherwise name_or_text unchanged

        Raises:
            NoActiveFileError: If no file has been loaded
        """
        try:
            return self.get_by_name(name_or_text)
        except QueryNotFoundError:
            logger.debug("Not a known query name, using input as SQL text")
            return name_or_text

    def get_query(
        self,
        name_or_text: str,
        params: Optional[Mapping[str, Any]] = None,
        strict: Optional[bool] = None
    ) -> str:
        """
        Resolve a query name or SQL text and bind parameters as literals.

        Args:
            name_or_text: Query name or literal SQL text
            params: Mapping of placeholder name to value
            strict: Strict binding (defaults to config.strict_binding)

        Returns:
            SQL with placeholders replaced

        Raises:
            NoActiveFileError: If no file has been loaded
            ParameterBindingError: In strict mode, on unused or unresolved names
        """
        sql = self.get_by_name_or_text(name_or_text)
        strict = config.strict_binding if strict is None else strict
        return bind_parameters(sql, params, strict=strict)

    def get_text_clause(
        self,
        name_or_text: str,
        params: Optional[Mapping[str, Any]] = None
    ) -> TextClause:
        """
        Resolve a query name or SQL text as a SQLAlchemy TextClause.

        Parameters are attached as bound parameters rather than rendered
        into the SQL.

        Args:
            name_or_text: Query name or literal SQL text
            params: Mapping of placeholder name to value

        Returns:
            TextClause ready for Connection.execute()
        """
        return to_text_clause(self.get_by_name_or_text(name_or_text), params)

    def modify_select_columns(self, name: str, columns: Optional[Sequence[str]]) -> str:
        """Get a query by name and replace its SELECT columns."""
        return statement_editor.replace_columns(self.get_by_name(name), columns)

    def modify_where_clause(self, name: str, conditions: Optional[Mapping[str, Any]]) -> str:
        """Get a query by name and replace its WHERE clause with equalities."""
        return statement_editor.replace_where(self.get_by_name(name), conditions)


# Global store instance
default_store = QueryStore()
