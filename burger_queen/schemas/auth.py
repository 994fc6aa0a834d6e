"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login. Presence is checked by the handler (400 when missing)."""

    email: str | None = Field(default=None, max_length=255, description="Email")
    password: str | None = Field(default=None, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(
        ..., serialization_alias="accessToken", description="JWT access token"
    )
