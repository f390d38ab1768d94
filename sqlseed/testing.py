"""
Attach the testing helpers to an application.

After attach_test_helpers(app, engine), tests reach everything through
app.state.test:

    helpers = app.state.test
    helpers.authenticate()
    seed = helpers.seed("comment", ["post", "user"])
"""

from typing import Optional, Sequence

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from sqlseed.authenticate import DEFAULT_TESTING_USER, authenticate
from sqlseed.schemas.auth import AuthContext, SessionUser
from sqlseed.seed import Seed


class TestHelpers:
    """Helpers bound to one application and one engine."""

    # Not a test class, despite the name
    __test__ = False

    def __init__(self, app: FastAPI, engine: AsyncEngine, **seed_options):
        self.app = app
        self.engine = engine
        self.seed_options = seed_options

    def authenticate(self, user: SessionUser = DEFAULT_TESTING_USER) -> AuthContext:
        return authenticate(self.app, user)

    def seed(self, model: str, dependencies: Optional[Sequence[str]] = None) -> Seed:
        return Seed(self.engine, model, dependencies, **self.seed_options)


def attach_test_helpers(app: FastAPI, engine: AsyncEngine, **seed_options) -> TestHelpers:
    """Create the helpers and store them on app.state.test."""
    helpers = TestHelpers(app, engine, **seed_options)
    app.state.test = helpers
    return helpers
