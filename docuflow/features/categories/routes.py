"""
Category routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, status

from docuflow.core.errors import EntityNotFound
from docuflow.core.repository import new_id
from docuflow.core.state import ConsoleState
from docuflow.features.categories.schemas import Category, CategoryCreate, CategoryUpdate
from docuflow.features.permissions.dependencies import require_permission
from docuflow.features.session.dependencies import get_console
from docuflow.features.users.schemas import User


router = APIRouter(tags=["categories"])


def _get_or_404(console: ConsoleState, category_id: str) -> Category:
    category = console.categories.get(category_id)
    if category is None:
        raise EntityNotFound("Category not found")
    return category


@router.get("/", response_model=list[Category])
async def list_categories(console: Annotated[ConsoleState, Depends(get_console)]):
    """List all categories (public; used by the reader's filter menu)."""
    return console.categories.all()


@router.post("/", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    actor: Annotated[User, Depends(require_permission("categories", "create"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    category = await console.categories.add(Category(id=new_id("cat"), name=category_data.name))
    await console.activity.record(actor.name, f'Created category "{category.name}".')
    return category


@router.patch("/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    actor: Annotated[User, Depends(require_permission("categories", "update"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    category = _get_or_404(console, category_id)
    category = category.model_copy(update=category_data.changes())
    await console.categories.update(category)
    await console.activity.record(actor.name, f'Updated category "{category.name}".')
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    actor: Annotated[User, Depends(require_permission("categories", "delete"))],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Delete a category. Documents filed under it show N/A."""
    category = _get_or_404(console, category_id)
    await console.categories.remove(category.id)
    await console.activity.record(actor.name, f'Deleted category "{category.name}".')
