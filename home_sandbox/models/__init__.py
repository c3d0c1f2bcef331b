"""Models package for database entities"""

from .base_model import BaseModel
from .device import Device
from .preset import Preset

__all__ = [
    'BaseModel',
    'Device',
    'Preset'
]
