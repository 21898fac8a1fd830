"""
Preference routes. Preferences live directly in the store, outside the state
container, and are not part of backups.
"""
from typing import Annotated
from fastapi import APIRouter, Depends

from docuflow.core import store as keys
from docuflow.core.state import ConsoleState
from docuflow.features.preferences.schemas import Preferences, PreferencesUpdate
from docuflow.features.session.dependencies import get_console


router = APIRouter(tags=["preferences"])


async def load_preferences(console: ConsoleState) -> Preferences:
    stored = await console.store.snapshot((keys.SIDEBAR_COLLAPSED, keys.REMEMBERED_EMAIL))
    return Preferences(
        sidebar_collapsed=bool(stored.get(keys.SIDEBAR_COLLAPSED, False)),
        remembered_email=stored.get(keys.REMEMBERED_EMAIL),
    )


@router.get("/", response_model=Preferences)
async def get_preferences(console: Annotated[ConsoleState, Depends(get_console)]):
    return await load_preferences(console)


@router.put("/", response_model=Preferences)
async def update_preferences(
    body: PreferencesUpdate,
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Only the fields present in the body change; an empty email forgets it."""
    if body.sidebar_collapsed is not None:
        await console.store.set(keys.SIDEBAR_COLLAPSED, body.sidebar_collapsed)
    if "remembered_email" in body.model_fields_set:
        if body.remembered_email:
            await console.store.set(keys.REMEMBERED_EMAIL, body.remembered_email)
        else:
            await console.store.remove(keys.REMEMBERED_EMAIL)
    return await load_preferences(console)
