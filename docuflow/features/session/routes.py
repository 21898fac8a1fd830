"""
Session routes: login, logout and the current session.
"""
from typing import Annotated
from fastapi import APIRouter, Depends
from starlette.requests import Request

from docuflow.core import config
from docuflow.core.rate_limit import limiter
from docuflow.core.state import ConsoleState
from docuflow.features.permissions.evaluator import is_super_admin
from docuflow.features.session import service
from docuflow.features.session.dependencies import get_console
from docuflow.features.session.schemas import LoginRequest, SessionResponse
from docuflow.features.users.service import to_user_response


router = APIRouter(tags=["session"])


def session_response(console: ConsoleState) -> SessionResponse:
    user = console.current_user
    if user is None:
        return SessionResponse(authenticated=False)
    role = console.current_role
    return SessionResponse(
        authenticated=True,
        user=to_user_response(console, user),
        permissions=role.permissions if role else None,
        is_super_admin=is_super_admin(role),
    )


@router.post("/login", response_model=SessionResponse)
@limiter.limit(config.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Sign in with email and password."""
    await service.login(console, credentials.email, credentials.password, credentials.remember)
    return session_response(console)


@router.post("/logout", response_model=SessionResponse)
async def logout(console: Annotated[ConsoleState, Depends(get_console)]):
    await service.logout(console)
    return session_response(console)


@router.get("/me", response_model=SessionResponse)
async def get_session(console: Annotated[ConsoleState, Depends(get_console)]):
    """Current session; ``authenticated`` is false when nobody is signed in."""
    return session_response(console)
