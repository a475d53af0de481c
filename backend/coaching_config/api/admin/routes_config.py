"""Config push and reload (config file master over env; push overrides at runtime)."""
from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError as SettingsValidationError

from coaching_config.api.deps import require_admin
from coaching_config.domain.access.models import Role
from coaching_config.settings import get_config_store

router = APIRouter()


@router.get("/config/overrides")
async def get_config_overrides(_: Role = Depends(require_admin)):
    """Overrides pushed since startup or the last clear."""
    return get_config_store().overrides


@router.post("/config", status_code=status.HTTP_200_OK)
async def update_config(
    body: dict = Body(..., embed=False),
    _: Role = Depends(require_admin),
):
    """
    Push config overrides at runtime. Merges into in-memory overrides; config file remains master over env.
    Unknown keys and invalid values keep the previous config and return 400.
    """
    try:
        get_config_store().update(body)
    except (KeyError, SettingsValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Config update failed: {e}",
        )
    return {"ok": True, "message": "Config updated"}


@router.post("/config/reload", status_code=status.HTTP_200_OK)
async def reload_config(_: Role = Depends(require_admin)):
    """Re-read the config file and reapply saved overrides. File remains master over env."""
    try:
        get_config_store().reload_from_file()
    except SettingsValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Config reload failed: {e}",
        )
    return {"ok": True, "message": "Config reloaded from file"}


@router.post("/config/clear-overrides", status_code=status.HTTP_200_OK)
async def clear_config_overrides(_: Role = Depends(require_admin)):
    """Drop pushed overrides and reset to config file (master) + env."""
    get_config_store().clear_overrides()
    return {"ok": True, "message": "Overrides cleared"}
