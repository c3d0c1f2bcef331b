"""Device operations.

All devices live in one global table: there is no per-session or per-user
scoping, so a delete-all issued by any caller clears the sandbox for everyone.
"""

from typing import Any, Dict, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loguru import logger
from home_sandbox.api.errors import InternalError, NotFound
from home_sandbox.api.schemas import DeviceCreate, DeviceUpdate, validate_payload
from home_sandbox.models.device import Device


def list_devices(session: Session) -> List[Device]:
    try:
        return session.query(Device).order_by(Device.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching devices: {e}")
        raise InternalError("Error fetching devices", str(e))


def get_device(session: Session, device_id: int) -> Device:
    try:
        device = session.get(Device, device_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching device {device_id}: {e}")
        raise InternalError("Error fetching device", str(e))
    if device is None:
        raise NotFound("Device not found", f"No device with id {device_id}")
    return device


def create_device(session: Session, payload: Dict[str, Any]) -> Device:
    fields = validate_payload(DeviceCreate, payload)
    try:
        device = Device().update_from(fields)
        session.add(device)
        session.commit()
        session.refresh(device)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error creating device: {e}")
        raise InternalError("Error creating device", str(e))
    logger.info(f"Created device {device.id} ({device.type} '{device.name}')")
    return device


def update_device(session: Session, device_id: int, payload: Dict[str, Any]) -> Device:
    """Merge the supplied fields into a device; ``settings`` is replaced as a whole"""
    fields = validate_payload(DeviceUpdate, payload)
    device = get_device(session, device_id)
    try:
        device.update_from(fields)
        session.commit()
        session.refresh(device)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error updating device {device_id}: {e}")
        raise InternalError("Error updating device", str(e))
    logger.info(f"Updated device {device_id}: {sorted(fields)}")
    return device


def delete_device(session: Session, device_id: int):
    device = get_device(session, device_id)
    try:
        session.delete(device)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error deleting device {device_id}: {e}")
        raise InternalError("Error deleting device", str(e))
    logger.info(f"Deleted device {device_id}")


def delete_all_devices(session: Session) -> int:
    """Remove every device row, returning how many were removed"""
    try:
        count = session.query(Device).delete()
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error deleting devices: {e}")
        raise InternalError("Error deleting devices", str(e))
    logger.info(f"Deleted all devices ({count} rows)")
    return count
