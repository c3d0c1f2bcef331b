# Initialize database package
from .base import Base
from .database import (
    SessionLocal, get_db,
    init_db, shutdown_db,
    engine
)

__all__ = [
    'Base', 'SessionLocal', 'get_db',
    'init_db', 'shutdown_db',
    'engine'
]
