"""
Mock session for functional tests.

authenticate(app) makes every route that depends on get_current_user see a
fixed, already logged-in user, without any credential exchange.

The user reaches handlers through FastAPI's dependency injection (one
resolution per request) rather than through shared mutable state, so a
test that needs a different user simply passes one in.
"""

from datetime import datetime, timezone
from typing import Callable

from fastapi import FastAPI

from sqlseed.api.deps import get_current_user
from sqlseed.core.logging import get_logger
from sqlseed.schemas.auth import AuthContext, SessionUser

logger = get_logger(__name__)


# =============================================================================
# DEFAULT USER FOR TESTS
# =============================================================================

DEFAULT_TESTING_USER = SessionUser(
    id=1,
    display_name="Testing Tester",
    slug="testing-tester",
    email="testing.tester@email.com",
    created=datetime(2014, 6, 15, 20, 47, 59, tzinfo=timezone.utc),
    updated=datetime(2014, 6, 15, 20, 47, 59, tzinfo=timezone.utc),
)


def authenticate(
    app: FastAPI,
    user: SessionUser = DEFAULT_TESTING_USER,
    dependency: Callable = get_current_user,
) -> AuthContext:
    """
    Log the test suite in as `user`.

    Calling it again replaces the override with the same (or new) user.

    Args:
        app: the application under test
        user: the user handlers should receive
        dependency: the app's current-user dependency to override
    """
    context = AuthContext(logged_in=True, user=user)

    def current_user() -> SessionUser:
        return context.user

    app.dependency_overrides[dependency] = current_user
    logger.debug("auth.installed", user_id=user.id)
    return context


def deauthenticate(app: FastAPI, dependency: Callable = get_current_user) -> None:
    """Remove the mock session; routes go back to real authentication."""
    app.dependency_overrides.pop(dependency, None)
