"""SQLAlchemy declarative Base and shared model configuration."""

import secrets

from sqlalchemy.orm import DeclarativeBase

# Record identifiers are 24 lowercase hex characters (12 random bytes).
OBJECT_ID_LENGTH = 24


def new_object_id() -> str:
    """Generate a new 24-hex-character record identifier."""
    return secrets.token_hex(OBJECT_ID_LENGTH // 2)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
