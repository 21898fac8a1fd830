"""
Role routes: the permission matrix editor.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, status

from docuflow.core.errors import EntityNotFound
from docuflow.core.repository import new_id
from docuflow.core.state import ConsoleState
from docuflow.features.permissions.dependencies import require_permission
from docuflow.features.roles.schemas import Role, RoleCreate, RoleUpdate
from docuflow.features.session.dependencies import get_console
from docuflow.features.users.schemas import User


router = APIRouter(tags=["roles"])


def _get_or_404(console: ConsoleState, role_id: str) -> Role:
    role = console.roles.get(role_id)
    if role is None:
        raise EntityNotFound("Role not found")
    return role


@router.get("/", response_model=list[Role])
async def list_roles(
    _user: Annotated[User, Depends(require_permission("roles", "read"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    return console.roles.all()


@router.get("/{role_id}", response_model=Role)
async def get_role(
    role_id: str,
    _user: Annotated[User, Depends(require_permission("roles", "read"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    return _get_or_404(console, role_id)


@router.post("/", response_model=Role, status_code=status.HTTP_201_CREATED)
async def create_role(
    role_data: RoleCreate,
    actor: Annotated[User, Depends(require_permission("roles", "create"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Create a role. Without a permission matrix it may only read documents."""
    role = Role(
        id=new_id("role"),
        name=role_data.name,
        description=role_data.description,
        permissions=role_data.permissions,
    )
    await console.roles.add(role)
    await console.activity.record(actor.name, f'Created role "{role.name}".')
    return role


@router.patch("/{role_id}", response_model=Role)
async def update_role(
    role_id: str,
    role_data: RoleUpdate,
    actor: Annotated[User, Depends(require_permission("roles", "update"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Changes apply immediately to every user holding the role, including the caller."""
    role = _get_or_404(console, role_id).model_copy(update=role_data.changes())
    await console.roles.update(role)
    await console.activity.record(actor.name, f'Updated role "{role.name}".')
    return role


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: str,
    actor: Annotated[User, Depends(require_permission("roles", "delete"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Delete a role. Users holding it keep the id and get no permissions."""
    role = _get_or_404(console, role_id)
    await console.roles.remove(role.id)
    await console.activity.record(actor.name, f'Deleted role "{role.name}".')
