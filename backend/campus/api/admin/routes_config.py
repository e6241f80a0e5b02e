"""Config push and reload (config file master over env; push overrides at runtime)."""
from typing import Any

from fastapi import APIRouter, Body, Depends

from campus.api.deps import get_current_viewer
from campus.domain.auth.models import Viewer
from campus.domain.auth.policies import ensure_can_manage_config
from campus.domain.common.errors import ValidationError
from campus.settings import Settings, get_config_store

router = APIRouter()


@router.post("/config")
async def update_config(
    body: dict[str, Any] = Body(...),
    viewer: Viewer = Depends(get_current_viewer),
):
    """
    Push config overrides at runtime, e.g. {"notification_list_limit": 20}.
    Unknown keys are rejected; a value that fails validation keeps the previous config.
    """
    ensure_can_manage_config(viewer)
    unknown = sorted(set(body) - set(Settings.model_fields))
    if unknown:
        raise ValidationError(f"Unknown config key(s): {', '.join(unknown)}")
    store = get_config_store()
    before = store.get_settings()
    store.update(body)
    if store.get_settings() is before:
        raise ValidationError("Config update failed validation; previous config kept")
    return {"ok": True, "message": "Config updated"}


@router.post("/config/reload")
async def reload_config(viewer: Viewer = Depends(get_current_viewer)):
    """Re-read the config file and reapply saved overrides."""
    ensure_can_manage_config(viewer)
    get_config_store().reload_from_file()
    return {"ok": True, "message": "Config reloaded from file"}


@router.post("/config/clear-overrides")
async def clear_config_overrides(viewer: Viewer = Depends(get_current_viewer)):
    """Drop pushed overrides and reset to config file + env."""
    ensure_can_manage_config(viewer)
    get_config_store().clear_overrides()
    return {"ok": True, "message": "Overrides cleared"}
