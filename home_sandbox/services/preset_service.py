"""Preset operations.

A preset stores a copy of its device templates. Loading one is a plain read;
turning the templates into devices is left to the caller.
"""

from typing import Any, Dict, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loguru import logger
from home_sandbox.api.errors import InternalError, NotFound
from home_sandbox.api.schemas import PresetCreate, PresetUpdate, validate_payload
from home_sandbox.models.preset import Preset


def list_presets(session: Session) -> List[Preset]:
    try:
        return session.query(Preset).order_by(Preset.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching presets: {e}")
        raise InternalError("Error fetching presets", str(e))


def get_preset(session: Session, preset_id: int) -> Preset:
    try:
        preset = session.get(Preset, preset_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching preset {preset_id}: {e}")
        raise InternalError("Error fetching preset", str(e))
    if preset is None:
        raise NotFound("Preset not found", f"No preset with id {preset_id}")
    return preset


def create_preset(session: Session, payload: Dict[str, Any]) -> Preset:
    fields = validate_payload(PresetCreate, payload)
    try:
        preset = Preset().update_from(fields)
        session.add(preset)
        session.commit()
        session.refresh(preset)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error creating preset: {e}")
        raise InternalError("Error creating preset", str(e))
    logger.info(f"Created preset {preset.id} '{preset.name}' with {len(preset.devices)} devices")
    return preset


def update_preset(session: Session, preset_id: int, payload: Dict[str, Any]) -> Preset:
    fields = validate_payload(PresetUpdate, payload)
    preset = get_preset(session, preset_id)
    try:
        preset.update_from(fields)
        session.commit()
        session.refresh(preset)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error updating preset {preset_id}: {e}")
        raise InternalError("Error updating preset", str(e))
    logger.info(f"Updated preset {preset_id}: {sorted(fields)}")
    return preset


def delete_preset(session: Session, preset_id: int):
    preset = get_preset(session, preset_id)
    try:
        session.delete(preset)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error deleting preset {preset_id}: {e}")
        raise InternalError("Error deleting preset", str(e))
    logger.info(f"Deleted preset {preset_id}")


def load_preset(session: Session, preset_id: int) -> Preset:
    """Return the stored snapshot unchanged"""
    preset = get_preset(session, preset_id)
    logger.info(f"Loaded preset {preset_id} '{preset.name}'")
    return preset
