"""
Department routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, status

from docuflow.core.errors import EntityNotFound
from docuflow.core.repository import new_id
from docuflow.core.state import ConsoleState
from docuflow.features.departments.schemas import Department, DepartmentCreate, DepartmentUpdate
from docuflow.features.permissions.dependencies import require_permission
from docuflow.features.session.dependencies import get_console
from docuflow.features.users.schemas import User


router = APIRouter(tags=["departments"])


@router.get("/", response_model=list[Department])
async def list_departments(console: Annotated[ConsoleState, Depends(get_console)]):
    return console.departments.all()


@router.post("/", response_model=Department, status_code=status.HTTP_201_CREATED)
async def create_department(
    department_data: DepartmentCreate,
    actor: Annotated[User, Depends(require_permission("departments", "create"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    department = await console.departments.add(Department(id=new_id("dept"), name=department_data.name))
    await console.activity.record(actor.name, f'Created department "{department.name}".')
    return department


@router.patch("/{department_id}", response_model=Department)
async def update_department(
    department_id: str,
    department_data: DepartmentUpdate,
    actor: Annotated[User, Depends(require_permission("departments", "update"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    department = console.departments.get(department_id)
    if department is None:
        raise EntityNotFound("Department not found")
    department = department.model_copy(update=department_data.changes())
    await console.departments.update(department)
    await console.activity.record(actor.name, f'Updated department "{department.name}".')
    return department


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: str,
    actor: Annotated[User, Depends(require_permission("departments", "delete"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """
    Delete a department.

    Users and documents that reference it are left untouched and show N/A;
    documents it issued can then only be changed by roles with editOthers.
    """
    department = console.departments.get(department_id)
    if department is None:
        raise EntityNotFound("Department not found")
    await console.departments.remove(department.id)
    await console.activity.record(actor.name, f'Deleted department "{department.name}".')
