"""
Database engine for the seeder.

SQLAlchemy 2.0 async pattern:
- Engine: manages the connection pool
- Connection: acquired per script, released right after it runs

There is no session factory and no ORM base here. Fixture scripts are raw
SQL, so the seeder only ever talks to connections.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from sqlseed.core.config import settings


# =============================================================================
# DATABASE ENGINE
# =============================================================================
# The engine maintains a pool of connections to the database.
#
# - echo=settings.debug: when True, logs every fixture script that runs
# - pool_pre_ping=True: tests connections before using them (handles stale connections)


def create_engine(database_url: Optional[str] = None, **kwargs) -> AsyncEngine:
    """
    Create an async engine for seeding.

    Usage:
        engine = create_engine()
        seed = Seed(engine, "user")
    """
    kwargs.setdefault("echo", settings.debug)
    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(database_url or settings.database_url, **kwargs)
