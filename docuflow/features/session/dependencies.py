"""
FastAPI dependencies for the console state and the current session.
"""
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from starlette.requests import Request

from docuflow.core.state import ConsoleState
from docuflow.features.users.schemas import User


def get_console(request: Request) -> ConsoleState:
    """The process-wide state container, attached to the app on startup."""
    return request.app.state.console


def get_session_user(console: Annotated[ConsoleState, Depends(get_console)]) -> Optional[User]:
    return console.current_user


def require_session(user: Annotated[Optional[User], Depends(get_session_user)]) -> User:
    """
    Require a signed-in, active user.

    Usage:
        @router.get("/me")
        async def me(user: Annotated[User, Depends(require_session)]):
            return user
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
        )
    return user
