"""
Shared fixtures for query store, binder and statement editor tests.

Key fixtures:
- query_file: writes the standard named query file to tmp_path and returns its path.
- write_query_file: factory writing arbitrary query file content to tmp_path.
- store: a fresh QueryStore that skips packaged resources.
- loaded_store: the store above with query_file already loaded.
"""

import pytest

from queries.query_store import QueryStore

TEST_QUERIES = """\
-- name: test_query
SELECT id, name, email FROM users WHERE status = :status;

-- name: test_query_with_numbers
SELECT id, name, age FROM users WHERE id = :id AND age > :age;

-- name: test_query_with_special_chars
SELECT id, name FROM users WHERE name = :name;

-- name: multi_line_query
SELECT id,
       name,
       email
FROM users
WHERE
    status = 'active'
ORDER BY name;
"""


@pytest.fixture
def write_query_file(tmp_path):
    """Factory writing query file content under tmp_path and returning the path as str."""
    def factory(content, filename="queries.sql"):
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return str(path)

    return factory


@pytest.fixture
def query_file(write_query_file):
    """Path of a query file holding TEST_QUERIES."""
    return write_query_file(TEST_QUERIES, "test_queries.sql")


@pytest.fixture
def store():
    """Fresh QueryStore that reads from the filesystem only."""
    return QueryStore(resource_package="")


@pytest.fixture
def loaded_store(store, query_file):
    """QueryStore with the standard test query file loaded."""
    store.load(query_file)
    return store
