"""
Route protection dependencies built on the permission evaluator.

The checks are advisory: they mirror what the console UI enables and disables.
"""
from typing import Annotated
from fastapi import Depends

from docuflow.core.errors import PermissionDenied
from docuflow.core.state import ConsoleState
from docuflow.features.permissions.evaluator import can_perform, is_super_admin
from docuflow.features.session.dependencies import get_console
from docuflow.features.users.schemas import User
from docuflow.utils import get_logger


log = get_logger(__name__)


def require_permission(category: str, op: str):
    """
    FastAPI dependency to require ``op`` on ``category``.

    Usage:
        @router.post("/")
        async def create_category(
            user: Annotated[User, Depends(require_permission("categories", "create"))]
        ):
            pass

    Returns the signed-in user.
    """
    async def permission_dependency(console: Annotated[ConsoleState, Depends(get_console)]) -> User:
        user = console.current_user
        if user is None:
            raise PermissionDenied("You must be signed in to do that.", reason="no_session")
        if not can_perform(console.current_role, category, op):
            log.info("Permission denied: user=%s %s on %s", user.id, op, category)
            raise PermissionDenied(
                f"You do not have permission to {op} {category}.",
                reason="missing_permission",
            )
        return user

    return permission_dependency


def require_super_admin():
    """FastAPI dependency for configuration, backup, restore and reset."""
    async def super_admin_dependency(console: Annotated[ConsoleState, Depends(get_console)]) -> User:
        user = console.current_user
        if user is None or not is_super_admin(console.current_role):
            log.info("Super admin access denied for %s", user.id if user else "anonymous")
            raise PermissionDenied("Only the super administrator can do that.", reason="not_super_admin")
        return user

    return super_admin_dependency
