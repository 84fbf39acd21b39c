"""Core configuration, database wiring and password/token primitives."""

from app.core.config import Settings, get_settings, settings
from app.core.database import SessionLocal, get_db, init_db

__all__ = ["Settings", "SessionLocal", "get_db", "get_settings", "init_db", "settings"]
