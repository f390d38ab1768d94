"""
Pytest configuration and fixtures.

Fixtures are reusable test setup/teardown functions.
They're automatically discovered by pytest from this file.
"""

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================
# This tells pytest to use asyncio for async tests, and loads the
# seed_engine / seed_factory fixtures

pytest_plugins = ["pytest_asyncio", "sqlseed.pytest_plugin"]


# =============================================================================
# FAKE ENGINE
# =============================================================================
# Stands in for an AsyncEngine: records every script it is asked to run and
# how many times each connection was released back to the pool.


class FakeConnection:
    def __init__(self, engine):
        self.engine = engine
        self.released = 0
        self.committed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.released += 1
        return False

    async def exec_driver_sql(self, sql, parameters=None, execution_options=None):
        self.engine.executed.append(sql.strip())
        if "FAIL" in sql:
            raise OperationalError(sql, {}, Exception("syntax error near FAIL"))

    async def commit(self):
        self.committed = True


class FakeEngine:
    def __init__(self):
        self.executed = []
        self.connections = []

    def connect(self):
        connection = FakeConnection(self)
        self.connections.append(connection)
        return connection


@pytest.fixture
def engine():
    return FakeEngine()


# =============================================================================
# SQL LAYOUT
# =============================================================================


@pytest.fixture
def sql_root(tmp_path) -> Path:
    """
    An application root with the standard layout:

        <root>/examples/sql/      table definitions
        <root>/test/fixtures/     setup/teardown scripts
    """
    (tmp_path / "examples" / "sql").mkdir(parents=True)
    (tmp_path / "test" / "fixtures").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_sql(sql_root):
    """Write a script under the root, e.g. write_sql("test/fixtures/user_setup.sql", "...")."""

    def write(relative: str, sql: str) -> Path:
        path = sql_root / relative
        path.write_text(sql, encoding="utf-8")
        return path

    return write


# =============================================================================
# SQLITE ENGINE
# =============================================================================


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    """A real async engine on a throwaway SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}")
    yield engine
    await engine.dispose()
