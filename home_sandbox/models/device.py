from typing import Any, Dict, Optional
from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import Mapped
from home_sandbox.models.base_model import BaseModel


class Device(BaseModel):
    """A simulated light or fan placed on the canvas"""
    __tablename__ = 'devices'

    fillable = ('type', 'name', 'settings', 'position_x', 'position_y')

    id: Mapped[int] = Column(Integer, primary_key=True)
    type: Mapped[str] = Column(String(20), nullable=False)
    name: Mapped[str] = Column(String(255), nullable=False)
    settings: Mapped[Dict[str, Any]] = Column(JSON, nullable=False, default=dict)
    position_x: Mapped[Optional[int]] = Column(Integer, nullable=True)
    position_y: Mapped[Optional[int]] = Column(Integer, nullable=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "settings": self.settings,
            "position_x": self.position_x,
            "position_y": self.position_y,
            **self._timestamps(),
        }

    def __repr__(self):
        return f"<Device(id={self.id}, name='{self.name}', type='{self.type}')>"
