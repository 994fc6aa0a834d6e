"""JWT login and auth dependencies (get_current_claims, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from burger_queen.core.database import get_db
from burger_queen.core.errors import NotFoundError, ValidationError
from burger_queen.core.security import (
    create_access_token,
    decode_access_token,
    verify_password,
)
from burger_queen.schemas.auth import LoginRequest, TokenResponse
from burger_queen.services import authorization as policy
from burger_queen.services.authorization import AuthClaims
from burger_queen.services.users import find_by_email

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    if not body.email or not body.password:
        raise ValidationError("email and password are required")

    user = find_by_email(db, body.email)
    if user is None:
        raise NotFoundError("User not found")
    if not verify_password(body.password, user.password_hash):
        raise ValidationError("Invalid email or password")
    token = create_access_token(user_id=user.id, role=user.role, email=user.email)
    return TokenResponse(access_token=token)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthClaims:
    """Dependency: require valid Bearer JWT and return its claims. Raises 401 if missing or invalid."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return AuthClaims.from_token_payload(payload)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_admin(
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
) -> AuthClaims:
    """Dependency: require authenticated caller with role 'admin'. Raises 403 for non-admin."""
    policy.require_admin(claims)
    return claims
