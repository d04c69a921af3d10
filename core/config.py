"""
=================================================
Configuration management for the named SQL store.
=================================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system ensures:
- Single source of truth for query loading and logging settings
- Type conversion for integer and boolean flags
- Sensible defaults so the library works without any .env file

Example:
    >>> from core.config import config
    >>>
    >>> # Where named query files are looked up first
    >>> print(config.resource_package)
    >>>
    >>> # Dialect used when editing SELECT statements
    >>> print(config.sql_dialect or 'generic')
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

TRUTHY_VALUES = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        True if the variable holds one of TRUTHY_VALUES (case-insensitive)
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in TRUTHY_VALUES


@dataclass
class QueryConfig:
    """Named query loading and binding settings.

    Attributes:
        default_file: Query file loaded by QueryStore.from_config (optional)
        resource_package: Package searched for query files before the filesystem
        encoding: Text encoding of query files
        sql_dialect: sqlglot dialect for statement editing ('' = generic)
        strict_binding: Default strictness of QueryStore.get_query
    """

    default_file: Optional[str]
    resource_package: Optional[str]
    encoding: str
    sql_dialect: str
    strict_binding: bool

    @property
    def dialect_or_none(self) -> Optional[str]:
        """Dialect name as sqlglot expects it (None for the generic dialect)."""
        return self.sql_dialect or None


@dataclass
class LoggingConfig:
    """Logging settings consumed by core.logger.setup_logging.

    Attributes:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name; no file handler when unset
        log_dir: Directory for the log file
        use_colors: Colored console output
    """

    level: str
    log_file: Optional[str]
    log_dir: Path
    use_colors: bool


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        query: QueryConfig instance with query loading settings
        logging: LoggingConfig instance with logging settings

    Properties:
        default_query_file: Query file loaded at startup, if any
        resource_package: Package searched first for query files
        encoding: Query file encoding
        sql_dialect: sqlglot dialect name
        strict_binding: Default binding strictness
        log_level: Logging level name

    Example:
        >>> config = Config()
        >>> print(f"Resources from {config.resource_package}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.query = QueryConfig(
            default_file=os.getenv('NAMED_SQL_DEFAULT_FILE') or None,
            resource_package=os.getenv('NAMED_SQL_RESOURCE_PACKAGE', 'queries.resources') or None,
            encoding=os.getenv('NAMED_SQL_ENCODING', 'utf-8'),
            sql_dialect=os.getenv('NAMED_SQL_DIALECT', ''),
            strict_binding=_env_flag('NAMED_SQL_STRICT_BINDING', False)
        )

        self.logging = LoggingConfig(
            level=os.getenv('NAMED_SQL_LOG_LEVEL', 'INFO').upper(),
            log_file=os.getenv('NAMED_SQL_LOG_FILE') or None,
            log_dir=Path(os.getenv('NAMED_SQL_LOG_DIR', 'logs')),
            use_colors=_env_flag('NAMED_SQL_LOG_COLORS', True)
        )

    @property
    def default_query_file(self) -> Optional[str]:
        """Get the query file loaded by QueryStore.from_config."""
        return self.query.default_file

    @property
    def resource_package(self) -> Optional[str]:
        """Get the package searched for query files before the filesystem."""
        return self.query.resource_package

    @property
    def encoding(self) -> str:
        """Get the query file encoding."""
        return self.query.encoding

    @property
    def sql_dialect(self) -> str:
        """Get the sqlglot dialect name ('' for generic SQL)."""
        return self.query.sql_dialect

    @property
    def strict_binding(self) -> bool:
        """Get the default binding strictness."""
        return self.query.strict_binding

    @property
    def log_level(self) -> str:
        """Get the logging level name."""
        return self.logging.level


# Global configuration instance
config = Config()
