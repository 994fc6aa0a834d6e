"""Request/response schemas for user endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Body for POST /users. All fields are checked by the authorization policy."""

    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)
    role: str | bool | dict[str, Any] | None = Field(
        default=None, description="'admin' or 'user' (or a legacy {'admin': bool} flag)"
    )


class UserOut(BaseModel):
    """User as returned by the API. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str
