"""Core app configuration and database."""

from burger_queen.core.config import get_settings, settings
from burger_queen.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
