"""
Preset endpoints for API v1.

These routes expose the preset operations to authenticated clients.
Every preset is scoped to the caller: listing returns only the
caller's presets and updating someone else's preset answers 404.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, status

from focus_timer_api.app.core.security import Identity, get_current_identity
from focus_timer_api.app.schemas.common import SQLITE_INT_MAX, SQLITE_INT_MIN
from focus_timer_api.app.schemas.preset import (
    PresetCreate,
    PresetListResponse,
    PresetResponse,
    PresetUpdate,
)
from focus_timer_api.app.services.preset_service import PresetService

router = APIRouter()


@router.get("/", response_model=PresetListResponse)
async def list_presets(
    identity: Optional[Identity] = Depends(get_current_identity),
) -> PresetListResponse:
    """Return all presets owned by the caller."""
    presets = await PresetService.list_presets(identity)
    return PresetListResponse(presets=presets)


@router.post("/", response_model=PresetResponse, status_code=status.HTTP_201_CREATED)
async def create_preset(
    preset_in: PresetCreate,
    identity: Optional[Identity] = Depends(get_current_identity),
) -> PresetResponse:
    """Create a preset.  ``isDefault: true`` makes it the caller's only default."""
    preset = await PresetService.create_preset(identity, preset_in)
    return PresetResponse(preset=preset)


@router.patch("/{preset_id}", response_model=PresetResponse)
async def update_preset(
    preset_in: PresetUpdate,
    preset_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    identity: Optional[Identity] = Depends(get_current_identity),
) -> PresetResponse:
    """Change only the fields present in the body."""
    preset = await PresetService.update_preset(identity, preset_id, preset_in)
    return PresetResponse(preset=preset)
