"""
Activity log routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends

from docuflow.core.state import ConsoleState
from docuflow.features.activity.schemas import ActivityLogResponse
from docuflow.features.session.dependencies import get_console, require_session
from docuflow.features.users.schemas import User


router = APIRouter(tags=["activity"])


@router.get("/", response_model=ActivityLogResponse)
async def list_activity(
    _user: Annotated[User, Depends(require_session)],
    console: Annotated[ConsoleState, Depends(get_console)],
    limit: int = 50,
):
    """Most recent entries first."""
    entries = console.activity.entries
    return ActivityLogResponse(items=entries[:limit], total=len(entries))
