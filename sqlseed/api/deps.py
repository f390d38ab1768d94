"""
FastAPI dependencies for route handlers.

Protected routes depend on get_current_user. In production something
upstream (a middleware, a login flow) puts the user on request.state;
in tests sqlseed.authenticate overrides the dependency outright.
"""

from fastapi import HTTPException, Request, status

from sqlseed.schemas.auth import SessionUser


async def get_current_user(request: Request) -> SessionUser:
    """
    Return the user attached to the request.

    Usage in a route:
        @router.get("/me")
        async def me(user: SessionUser = Depends(get_current_user)):
            return user

    Raises:
        401 Unauthorized: If no user is attached to the request
    """
    user = getattr(request.state, "user", None)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    return SessionUser.model_validate(user)
