"""Pydantic models for request validation.

Create models require every mandatory field. Update models follow
"sometimes" semantics: a field may be omitted, but when present it must
satisfy the same rule as on create. Those fields are declared with their
real type and a ``None`` default so an explicit ``null`` fails validation.
A preset update that supplies ``devices`` replaces the whole snapshot, so
every element is held to the full template rule.
"""

from typing import Any, Dict, List, Literal, Optional, Type
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from home_sandbox.api.errors import ValidationError

DeviceType = Literal['light', 'fan']
DEVICE_TYPES = ('light', 'fan')


class _Payload(BaseModel):
    model_config = ConfigDict(extra='ignore')


class DeviceCreate(_Payload):
    type: DeviceType
    name: str = Field(..., max_length=255)
    settings: Dict[str, Any]
    position_x: Optional[int] = None
    position_y: Optional[int] = None


class DeviceUpdate(_Payload):
    type: DeviceType = None
    name: str = Field(None, max_length=255)
    settings: Dict[str, Any] = None
    position_x: Optional[int] = None
    position_y: Optional[int] = None


class DeviceTemplate(_Payload):
    type: DeviceType
    name: str = Field(..., max_length=255)
    settings: Dict[str, Any]


class PresetCreate(_Payload):
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    devices: List[DeviceTemplate] = Field(..., min_length=1)


class PresetUpdate(_Payload):
    name: str = Field(None, max_length=255)
    description: Optional[str] = None
    devices: List[DeviceTemplate] = Field(None, min_length=1)


def _field_path(loc) -> str:
    return ".".join(str(part) for part in loc)


def format_errors(exc: PydanticValidationError) -> Dict[str, List[str]]:
    """Group pydantic errors by dotted field path"""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = _field_path(error["loc"]) or "body"
        errors.setdefault(field, []).append(error["msg"])
    return errors


def validate_payload(schema: Type[BaseModel], payload: Any) -> Dict[str, Any]:
    """Validate a request body and return only the fields it supplied"""
    if not isinstance(payload, dict):
        raise ValidationError({"body": ["Request body must be a JSON object"]})
    try:
        model = schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(format_errors(e))
    return model.model_dump(exclude_unset=True)
