"""User endpoints: admin listing and creation, self-or-admin read/update/delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.orm import Session

from burger_queen.api.v1.auth import get_current_claims
from burger_queen.core.config import get_settings
from burger_queen.core.database import get_db
from burger_queen.schemas.user import UserCreate, UserOut
from burger_queen.services import users as user_service
from burger_queen.services.authorization import AuthClaims
from burger_queen.services.pagination import build_link_header, resolve_limit

router = APIRouter()


@router.get("", response_model=list[UserOut])
def list_users(
    response: Response,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[UserOut]:
    """List all users (admin only), paginated with a Link header."""
    settings = get_settings()
    limit = resolve_limit(limit, settings)
    users, total = user_service.list_users(db, claims, page, limit)
    response.headers["Link"] = build_link_header(
        f"{settings.API_PREFIX}/users", page, limit, total
    )
    return [UserOut.model_validate(u) for u in users]


@router.get("/{uid}", response_model=UserOut)
def get_user(
    uid: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Fetch one user by id or email (the user themselves or an admin)."""
    return UserOut.model_validate(user_service.get_user(db, claims, uid))


@router.post("", response_model=UserOut)
def create_user(
    body: UserCreate,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Create a user (admin only). Duplicate email is rejected with 403."""
    user = user_service.create_user(db, claims, body.model_dump())
    return UserOut.model_validate(user)


@router.patch("/{uid}", response_model=UserOut)
def update_user(
    uid: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    body: Annotated[dict[str, Any], Body()],
) -> UserOut:
    """
    Update email, password or role by id or email. Non-admins may update
    themselves but never a role.
    """
    return UserOut.model_validate(user_service.update_user(db, claims, uid, body))


@router.delete("/{uid}", response_model=UserOut)
def delete_user(
    uid: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Delete a user by id or email (the user themselves or an admin)."""
    return UserOut.model_validate(user_service.delete_user(db, claims, uid))
