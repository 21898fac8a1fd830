"""
User management operations shared by the users, profile and session routes.
"""
from typing import TYPE_CHECKING, Optional

from docuflow.core.errors import DuplicateEntity, EntityNotFound
from docuflow.core.repository import new_id
from docuflow.features.users.schemas import User, UserCreate, UserResponse, UserUpdate

if TYPE_CHECKING:
    from docuflow.core.state import ConsoleState


def to_user_response(state: "ConsoleState", user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        department_id=user.department_id,
        role_id=user.role_id,
        department_name=state.departments.name_of(user.department_id),
        role_name=state.roles.name_of(user.role_id),
        last_login=user.last_login,
        status=user.status,
    )


def get_user_or_404(state: "ConsoleState", user_id: str) -> User:
    user = state.users.get(user_id)
    if user is None:
        raise EntityNotFound("User not found")
    return user


def _ensure_unique_email(state: "ConsoleState", email: str, exclude_id: Optional[str] = None) -> None:
    if any(u.email.lower() == email.lower() and u.id != exclude_id for u in state.users):
        raise DuplicateEntity("A user with this email already exists")


async def create_user(state: "ConsoleState", actor: User, data: UserCreate) -> User:
    _ensure_unique_email(state, data.email)
    user = User(id=new_id("user"), **data.model_dump())
    await state.users.add(user)
    await state.activity.record(actor.name, f'Created user "{user.name}".')
    return user


async def update_user(state: "ConsoleState", actor: User, user_id: str, data: UserUpdate) -> User:
    user = get_user_or_404(state, user_id)
    update_dict = data.changes()
    if "email" in update_dict:
        _ensure_unique_email(state, update_dict["email"], exclude_id=user.id)
    user = user.model_copy(update=update_dict)
    await state.users.update(user)
    await state.activity.record(actor.name, f'Updated user "{user.name}".')
    return user


async def delete_user(state: "ConsoleState", actor: User, user_id: str) -> User:
    user = get_user_or_404(state, user_id)
    await state.users.remove(user.id)
    await state.activity.record(actor.name, f'Deleted user "{user.name}".')
    return user


async def toggle_user_status(state: "ConsoleState", actor: User, user_id: str) -> User:
    user = get_user_or_404(state, user_id)
    new_status = "suspended" if user.status == "active" else "active"
    user = user.model_copy(update={"status": new_status})
    await state.users.update(user)
    label = "Active" if new_status == "active" else "Suspended"
    await state.activity.record(actor.name, f'Changed status of user "{user.name}" to "{label}".')
    return user


async def reset_password(state: "ConsoleState", actor: User, user_id: str, password: str) -> User:
    user = get_user_or_404(state, user_id)
    user = user.model_copy(update={"password": password})
    await state.users.update(user)
    await state.activity.record(actor.name, f'Reset password for user "{user.name}".')
    return user
