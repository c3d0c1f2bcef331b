"""REST endpoints for simulated devices"""

from typing import Any
from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from home_sandbox.api.errors import SandboxError, error_response
from home_sandbox.api.responses import success_response, unexpected_error
from home_sandbox.database import get_db
from home_sandbox.services import device_service

router = APIRouter(prefix="/devices", tags=["devices"])


@router.get("")
def index(db: Session = Depends(get_db)):
    """List all devices"""
    try:
        devices = device_service.list_devices(db)
        return success_response([d.to_dict() for d in devices])
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error fetching devices", e)


@router.post("")
def store(payload: Any = Body(...), db: Session = Depends(get_db)):
    """Create a device"""
    try:
        device = device_service.create_device(db, payload)
        return success_response(device.to_dict(), "Device created successfully", status_code=201)
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error creating device", e)


@router.delete("")
def destroy_all(db: Session = Depends(get_db)):
    """Delete every device"""
    try:
        device_service.delete_all_devices(db)
        return success_response(message="All devices deleted successfully")
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error deleting devices", e)


@router.get("/{device_id}")
def show(device_id: int = Path(..., description="The ID of the device"), db: Session = Depends(get_db)):
    """Get a single device"""
    try:
        return success_response(device_service.get_device(db, device_id).to_dict())
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error fetching device", e)


@router.put("/{device_id}")
def update(
    device_id: int = Path(..., description="The ID of the device"),
    payload: Any = Body(...),
    db: Session = Depends(get_db)
):
    """Partially update a device"""
    try:
        device = device_service.update_device(db, device_id, payload)
        return success_response(device.to_dict(), "Device updated successfully")
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error updating device", e)


@router.delete("/{device_id}")
def destroy(device_id: int = Path(..., description="The ID of the device"), db: Session = Depends(get_db)):
    """Delete a single device"""
    try:
        device_service.delete_device(db, device_id)
        return success_response(message="Device deleted successfully")
    except SandboxError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error("Error deleting device", e)
