"""Core application components."""

from .config import Settings, settings
from .database import AsyncSessionLocal, atomic, drop_db, engine, init_db
from .exceptions import DataIntegrityError, JuiceboxError, NotFoundError

__all__ = [
    "settings",
    "Settings",
    "engine",
    "AsyncSessionLocal",
    "atomic",
    "init_db",
    "drop_db",
    "JuiceboxError",
    "NotFoundError",
    "DataIntegrityError",
]
