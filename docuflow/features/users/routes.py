"""
User management routes and the self-service profile routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status

from docuflow.core.state import ConsoleState
from docuflow.features.permissions.dependencies import require_permission
from docuflow.features.session.dependencies import get_console, require_session
from docuflow.features.users import service
from docuflow.features.users.schemas import (
    PasswordChange,
    PasswordReset,
    ProfileUpdate,
    User,
    UserCreate,
    UserResponse,
    UserUpdate,
)


router = APIRouter(tags=["users"])
profile_router = APIRouter(tags=["profile"])


@router.get("/", response_model=list[UserResponse])
async def list_users(
    _user: Annotated[User, Depends(require_permission("users", "read"))],
    console: Annotated[ConsoleState, Depends(get_console)],
    skip: int = 0,
    limit: int = 100,
):
    """List users with their department and role names."""
    return [service.to_user_response(console, u) for u in console.users.all()[skip:skip + limit]]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _user: Annotated[User, Depends(require_permission("users", "read"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    return service.to_user_response(console, service.get_user_or_404(console, user_id))


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    actor: Annotated[User, Depends(require_permission("users", "create"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Create a new user. Emails must be unique."""
    user = await service.create_user(console, actor, user_data)
    return service.to_user_response(console, user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    actor: Annotated[User, Depends(require_permission("users", "update"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    user = await service.update_user(console, actor, user_id, user_data)
    return service.to_user_response(console, user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    actor: Annotated[User, Depends(require_permission("users", "delete"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Hard delete. Documents and log entries keep their references."""
    await service.delete_user(console, actor, user_id)


@router.post("/{user_id}/toggle-status", response_model=UserResponse)
async def toggle_user_status(
    user_id: str,
    actor: Annotated[User, Depends(require_permission("users", "update"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Switch between active and suspended. A suspended user loses any open session."""
    user = await service.toggle_user_status(console, actor, user_id)
    return service.to_user_response(console, user)


@router.post("/{user_id}/reset-password", response_model=UserResponse)
async def reset_password(
    user_id: str,
    body: PasswordReset,
    actor: Annotated[User, Depends(require_permission("users", "update"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    user = await service.reset_password(console, actor, user_id, body.password)
    return service.to_user_response(console, user)


@profile_router.get("/", response_model=UserResponse)
async def get_profile(
    user: Annotated[User, Depends(require_session)],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """The signed-in user's profile; dangling department or role shows as N/A."""
    return service.to_user_response(console, user)


@profile_router.patch("/", response_model=UserResponse)
async def update_profile(
    body: ProfileUpdate,
    user: Annotated[User, Depends(require_session)],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    user = user.model_copy(update={"name": body.name})
    await console.users.update(user)
    await console.activity.record(user.name, "Updated their profile.")
    return service.to_user_response(console, user)


@profile_router.post("/password", response_model=UserResponse)
async def change_password(
    body: PasswordChange,
    user: Annotated[User, Depends(require_session)],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Change the signed-in user's own password."""
    if body.current_password != user.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    if body.new_password != body.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New passwords do not match",
        )
    user = user.model_copy(update={"password": body.new_password})
    await console.users.update(user)
    await console.activity.record(user.name, "Changed their password.")
    return service.to_user_response(console, user)
