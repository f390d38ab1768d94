"""
Pytest fixtures for seeding.

Enable them from a conftest.py:

    pytest_plugins = ["pytest_asyncio", "sqlseed.pytest_plugin"]

then override `seed_engine` if the default database URL is not the one
the suite should use.
"""

import pytest_asyncio

from sqlseed.core.db import create_engine
from sqlseed.core.logging import setup_logging
from sqlseed.errors import SeedFailedError
from sqlseed.seed import Seed


def pytest_configure(config):
    setup_logging()


@pytest_asyncio.fixture
async def seed_engine():
    """Engine connected to settings.database_url, disposed after the test."""
    engine = create_engine()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def seed_factory(seed_engine):
    """
    Set up a model's fixtures now, tear them down after the test.

    Usage:
        async def test_comments(seed_factory):
            await seed_factory("comment", ["post", "user"])
    """
    seeds = []

    async def factory(model, dependencies=None, **options):
        seed = Seed(seed_engine, model, dependencies, **options)
        seeds.append(seed)
        await seed.setup()
        return seed

    yield factory

    await tear_down_all(seeds)


async def tear_down_all(seeds):
    """
    Tear down seeds newest first.

    Every seed is torn down even when an earlier teardown fails; the
    failures are raised together once all of them have run.
    """
    failures = []
    for seed in reversed(seeds):
        try:
            await seed.teardown()
        except SeedFailedError as exc:
            failures.extend(exc.failures)

    if failures:
        raise SeedFailedError(failures)
