"""
Pydantic schemas for the test session.

These describe who the tests are "logged in" as:
- SessionUser: the user object route handlers receive
- AuthContext: what authenticate() hands back to the test
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SessionUser(BaseModel):
    """
    The user attached to an authenticated request.

    Example:
        {
            "id": 1,
            "display_name": "Testing Tester",
            "slug": "testing-tester",
            "email": "testing.tester@email.com",
            "created": "2014-06-15T20:47:59Z",
            "updated": "2014-06-15T20:47:59Z"
        }
    """

    id: int
    display_name: str = Field(..., description="Name shown in the UI")
    slug: str
    email: str
    created: datetime
    updated: datetime

    # Read attributes from ORM objects as well as dicts
    model_config = {"from_attributes": True, "frozen": True}


class AuthContext(BaseModel):
    """The session a test runs under after authenticate()."""

    logged_in: bool = True
    user: SessionUser
