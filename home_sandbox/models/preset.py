from typing import Any, Dict, List, Optional
from sqlalchemy import Column, Integer, String, Text, JSON
from sqlalchemy.orm import Mapped
from home_sandbox.models.base_model import BaseModel


class Preset(BaseModel):
    """A named snapshot of device templates.

    ``devices`` holds ``{type, name, settings}`` entries copied at save time.
    Nothing links them back to rows in the ``devices`` table.
    """
    __tablename__ = 'presets'

    fillable = ('name', 'description', 'devices')

    id: Mapped[int] = Column(Integer, primary_key=True)
    name: Mapped[str] = Column(String(255), nullable=False)
    description: Mapped[Optional[str]] = Column(Text, nullable=True)
    devices: Mapped[List[Dict[str, Any]]] = Column(JSON, nullable=False, default=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "devices": self.devices,
            **self._timestamps(),
        }

    def __repr__(self):
        return f"<Preset(id={self.id}, name='{self.name}', devices={len(self.devices or [])})>"
