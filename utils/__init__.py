"""
==========================
Utility Functions Package.
==========================

Reusable helpers shared across the query store.

Modules:
    resource_utils: Packaged-resource and filesystem reading of SQL files
"""

__version__ = "0.1.0"
__all__ = [
    'SQLSourceError',
    'read_sql_source',
    'resource_exists'
]

from .resource_utils import SQLSourceError, read_sql_source, resource_exists
