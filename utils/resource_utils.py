"""
=============================================
Source reading utilities for SQL query files.
=============================================

Resolves a query file name the same way on every call: first as a resource
packaged inside an importable package, then as a plain filesystem path.
Packaged resources let applications ship their .sql files inside a wheel
and refer to them by bare name.

Example:
    >>> from utils.resource_utils import read_sql_source
    >>>
    >>> # Packaged resource (queries/resources/example_queries.sql)
    >>> content = read_sql_source('example_queries.sql', package='queries.resources')
    >>>
    >>> # Filesystem path
    >>> content = read_sql_source('/srv/app/sql/reports.sql')
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class SQLSourceError(Exception):
    """Exception raised when a SQL source is neither a resource nor a readable file."""
    pass


def resource_exists(path: str, package: Optional[str]) -> bool:
    """
    Check whether a resource is packaged inside the given package.

    Absolute paths are never treated as resources.

    Args:
        path: Resource path relative to the package
        package: Dotted package name, or None to skip the lookup

    Returns:
        True if the package is importable and contains the resource
    """
    if not package or not path or Path(path).is_absolute():
        return False

    try:
        return resources.files(package).joinpath(path).is_file()
    except (ModuleNotFoundError, TypeError) as exc:
        logger.debug(f"Resource package '{package}' unavailable: {exc}")
        return False


def read_sql_source(
    path: Union[str, Path],
    package: Optional[str] = None,
    encoding: str = 'utf-8'
) -> str:
    """
    Read the full text of a SQL source.

    Args:
        path: Resource name or filesystem path
        package: Package searched before the filesystem (optional)
        encoding: Text encoding

    Returns:
        File content as text

    Raises:
        SQLSourceError: If the source cannot be located or read
    """
    name = str(path)

    try:
        if resource_exists(name, package):
            logger.debug(f"Reading '{name}' from package resources of '{package}'")
            return resources.files(package).joinpath(name).read_text(encoding=encoding)

        logger.debug(f"Reading '{name}' from filesystem")
        return Path(name).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise SQLSourceError(f"Cannot read SQL source '{name}': {exc}") from exc
