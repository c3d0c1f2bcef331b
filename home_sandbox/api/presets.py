"""REST endpoints for device presets"""

from typing import Any
from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from home_sandbox.api.errors import SandboxError, error_response
from home_sandbox.api.responses import success_response, unexpected_error
from home_sandbox.database import get_db
from home_sandbox.services import preset_service

router = APIRouter(prefix="/presets", tags=["presets"])


@router.get("")
def index(db: Session = Depends(get_db)):
    """List all presets"""
    try:
        presets = preset_service.list_presets(db)
        return success_response([p.to_dict() for p in presets])
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error fetching presets", e)


@router.post("")
def store(payload: Any = Body(...), db: Session = Depends(get_db)):
    """Save a preset"""
    try:
        preset = preset_service.create_preset(db, payload)
        return success_response(preset.to_dict(), "Preset created successfully", status_code=201)
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error creating preset", e)


@router.get("/{preset_id}")
def show(preset_id: int = Path(..., description="The ID of the preset"), db: Session = Depends(get_db)):
    """Get a single preset"""
    try:
        return success_response(preset_service.get_preset(db, preset_id).to_dict())
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error fetching preset", e)


@router.put("/{preset_id}")
def update(
    preset_id: int = Path(..., description="The ID of the preset"),
    payload: Any = Body(...),
    db: Session = Depends(get_db)
):
    """Partially update a preset"""
    try:
        preset = preset_service.update_preset(db, preset_id, payload)
        return success_response(preset.to_dict(), "Preset updated successfully")
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error updating preset", e)


@router.delete("/{preset_id}")
def destroy(preset_id: int = Path(..., description="The ID of the preset"), db: Session = Depends(get_db)):
    """Delete a preset"""
    try:
        preset_service.delete_preset(db, preset_id)
        return success_response(message="Preset deleted successfully")
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error deleting preset", e)


@router.get("/{preset_id}/load")
def load(preset_id: int = Path(..., description="The ID of the preset"), db: Session = Depends(get_db)):
    """Return a preset's stored snapshot; the caller materializes the devices"""
    try:
        preset = preset_service.load_preset(db, preset_id)
        return success_response(preset.to_dict(), "Preset loaded successfully")
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error loading preset", e)
