from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import Mapped
from home_sandbox.database.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Base model with timestamps and field-level updates"""
    __abstract__ = True

    # Fields a client may assign through create/update payloads
    fillable: Iterable[str] = ()

    created_at: Mapped[Optional[datetime]] = Column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[Optional[datetime]] = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def update_from(self, fields: Dict[str, Any]):
        """Assign only the supplied fillable fields, leaving the rest untouched"""
        for name, value in fields.items():
            if name in self.fillable:
                setattr(self, name, value)
        return self

    @staticmethod
    def _timestamp(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    def _timestamps(self) -> Dict[str, Optional[str]]:
        return {
            "created_at": self._timestamp(self.created_at),
            "updated_at": self._timestamp(self.updated_at),
        }
