"""
================================================
Core infrastructure package for named SQL store.
================================================

This package provides centralized configuration management and logging
infrastructure used by the query store.

Modules:
    config: Configuration management from environment variables
    logger: Logging setup and logger retrieval

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Query files resolved from {config.resource_package}")
"""

__version__ = "0.1.0"
__all__ = ['get_logger', 'setup_logging', 'config', 'Config']

from core.config import Config, config
from core.logger import get_logger, setup_logging
