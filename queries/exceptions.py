"""
==========================================
Exceptions raised by the named SQL store.
==========================================

All errors derive from NamedQueryError so callers can catch the whole family,
while each one also derives from the closest built-in exception so existing
``except LookupError`` / ``except ValueError`` handlers keep working.

Classes:
    NamedQueryError: Base class for all query store errors
    QueryLoadError: Query file could not be located or read
    NoActiveFileError: Lookup attempted before any query file was loaded
    QueryNotFoundError: Query name absent from the current query file
    SQLParseError: Text handed to the statement editor is not valid SQL
    NotASelectError: Statement editor invoked on something other than a SELECT
    ParameterBindingError: Strict binding found unused or unresolved parameters
"""

from typing import Iterable, Optional


class NamedQueryError(Exception):
    """Base exception for named query loading, binding and editing."""
    pass


class QueryLoadError(NamedQueryError):
    """Exception raised when a query file cannot be located or read.

    Attributes:
        path: Path (or resource name) that failed to load
    """

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"Failed to read SQL file: {path}")


class NoActiveFileError(NamedQueryError, RuntimeError):
    """Exception raised when a query is requested before any file was loaded."""

    def __init__(self, message: str = "Default SQL file path not set. Call load() first."):
        super().__init__(message)


class QueryNotFoundError(NamedQueryError, LookupError):
    """Exception raised when a query name is absent from the current file.

    Attributes:
        name: Requested query name
        path: Query file that was searched
    """

    def __init__(self, name: str, path: str):
        self.name = name
        self.path = path
        super().__init__(f"Query with name '{name}' not found in file: {path}")


class SQLParseError(NamedQueryError, ValueError):
    """Exception raised when SQL text cannot be parsed."""
    pass


class NotASelectError(NamedQueryError, ValueError):
    """Exception raised when a statement is not a plain SELECT."""
    pass


class ParameterBindingError(NamedQueryError, ValueError):
    """Exception raised by strict binding.

    Attributes:
        unused: Parameter names with no matching placeholder in the SQL
        unresolved: Placeholder names left in the SQL after binding
    """

    def __init__(self, unused: Iterable[str] = (), unresolved: Iterable[str] = ()):
        self.unused = sorted(unused)
        self.unresolved = list(unresolved)
        problems = []
        if self.unused:
            problems.append(f"unused parameters: {', '.join(self.unused)}")
        if self.unresolved:
            problems.append(f"unresolved placeholders: {', '.join(self.unresolved)}")
        super().__init__("Parameter binding failed (" + "; ".join(problems) + ")")
