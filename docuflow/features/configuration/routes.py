"""
System configuration routes: branding, theme, backup, restore and reset.

Everything except reading the configuration and its palette is reserved to the
super administrator.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.requests import Request
from starlette.responses import JSONResponse

from docuflow.core.state import ConsoleState
from docuflow.features.configuration import backup
from docuflow.features.configuration.schemas import Config, ConfigUpdate, PaletteResponse, RestoreResponse
from docuflow.features.configuration.theme import BASE_SHADE, generate_palette, rgb_string
from docuflow.features.permissions.dependencies import require_super_admin
from docuflow.features.session.dependencies import get_console
from docuflow.features.users.schemas import User


router = APIRouter(tags=["config"])

LOGO_SLOT = "config:logo"


@router.get("/", response_model=Config)
async def get_config(console: Annotated[ConsoleState, Depends(get_console)]):
    return console.config


@router.put("/", response_model=Config)
async def update_config(
    config_data: ConfigUpdate,
    actor: Annotated[User, Depends(require_super_admin())],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    config = console.config.model_copy(update=config_data.changes())
    await console.update_config(config)
    await console.activity.record(actor.name, "Updated system configuration.")
    return config


@router.put("/logo", response_model=Config)
async def upload_logo(
    actor: Annotated[User, Depends(require_super_admin())],
    console: Annotated[ConsoleState, Depends(get_console)],
    file: UploadFile = File(...),
):
    """Replace the logo with the uploaded image, stored as a data URL."""
    logo = await console.uploads.read(LOGO_SLOT, file)
    if logo is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A newer logo upload replaced this one",
        )
    config = await console.update_config(console.config.model_copy(update={"logo": logo}))
    await console.activity.record(actor.name, "Updated system configuration.")
    return config


@router.get("/palette", response_model=PaletteResponse)
async def get_palette(console: Annotated[ConsoleState, Depends(get_console)]):
    shades = generate_palette(console.config.theme_color)
    return PaletteResponse(base=shades[BASE_SHADE], shades=shades, rgb=rgb_string(shades[BASE_SHADE]))


@router.get("/backup")
async def download_backup(
    actor: Annotated[User, Depends(require_super_admin())],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Download every stored collection as one JSON file."""
    data = await backup.build_backup(console.store)
    await console.activity.record(actor.name, "Downloaded a system backup.")
    return JSONResponse(
        content=data,
        headers={"Content-Disposition": f'attachment; filename="{backup.backup_filename()}"'},
    )


@router.post("/restore", response_model=RestoreResponse)
async def restore_backup(
    request: Request,
    _actor: Annotated[User, Depends(require_super_admin())],
    console: Annotated[ConsoleState, Depends(get_console)],
    file: UploadFile = File(...),
):
    """
    Restore from an uploaded backup file.

    The file is fully validated first; a malformed file changes nothing. On
    success every known key is replaced, the session ends and the state is
    reloaded.
    """
    try:
        raw = await file.read()
    finally:
        await file.close()
    data = backup.parse_backup(raw)
    request.app.state.console = await backup.restore_backup(console.store, data)
    return RestoreResponse(
        message="Data restored. Sign in again to continue.",
        restored_keys=list(data),
    )


@router.post("/reset", response_model=RestoreResponse)
async def reset_data(
    request: Request,
    _actor: Annotated[User, Depends(require_super_admin())],
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Erase all data and reseed the bootstrap dataset."""
    request.app.state.console = await backup.reset_data(console.store)
    return RestoreResponse(message="All data has been reset to defaults.", restored_keys=[])
