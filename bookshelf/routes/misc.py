"""
Miscellaneous routes: health check and settings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from .. import __version__
from ..config import state, get_settings
from ..ledgers import SettingsLedger
from ..schemas import SettingsResponse, SettingsUpdateRequest

router = APIRouter(tags=["misc"])


# ─────────────────────────────────────────────────────────────
# Health Check
# ─────────────────────────────────────────────────────────────

@router.get("/status")
async def health_check() -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "articles": len(state.catalog) if state.catalog is not None else 0,
        "chat_enabled": state.provider is not None,
    }


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────

@router.get("/settings")
async def read_settings(
    settings: Annotated[SettingsLedger, Depends(get_settings)]
) -> SettingsResponse:
    """Get theme and language settings."""
    return SettingsResponse.from_settings(settings.current())


@router.put("/settings")
async def update_settings(
    request: SettingsUpdateRequest,
    settings: Annotated[SettingsLedger, Depends(get_settings)]
) -> SettingsResponse:
    """Update settings. Omitted fields keep their value."""
    if request.theme is not None:
        settings.set_theme(request.theme)
    if request.language is not None:
        settings.set_language(request.language)
    return SettingsResponse.from_settings(settings.current())


@router.post("/settings/theme/toggle")
async def toggle_theme(
    settings: Annotated[SettingsLedger, Depends(get_settings)]
) -> SettingsResponse:
    """Switch between light and dark theme."""
    settings.toggle_theme()
    return SettingsResponse.from_settings(settings.current())
