"""User store access and the user flows (list, read, create, update, delete).

Every flow runs the authorization policy first and only then touches the
store. Lookups take a TargetRef so id and email paths share one code path.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from burger_queen.core.errors import ConflictError, NotFoundError, ValidationError
from burger_queen.core.security import hash_password
from burger_queen.models import User
from burger_queen.services import authorization as policy
from burger_queen.services.authorization import (
    AuthClaims,
    ByEmail,
    Role,
    TargetRef,
)
from burger_queen.services.pagination import paginate

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"
USER_EXISTS_MESSAGE = "User already exists"


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def _query_by_key(db: Session, ref: TargetRef):
    if isinstance(ref, ByEmail):
        return db.query(User).filter(User.email == ref.email)
    return db.query(User).filter(User.id == ref.id)


def find_by_target(db: Session, ref: TargetRef | None) -> User | None:
    """Look up a user by a parsed target; an unparseable target finds nothing."""
    if ref is None:
        return None
    if isinstance(ref, ByEmail):
        return find_by_email(db, ref.email)
    return find_by_id(db, ref.id)


def insert_user(db: Session, email: str, password_hash: str, role: Role) -> User:
    user = User(email=email, password_hash=password_hash, role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_by_key(
    db: Session, ref: TargetRef | None, fields: Mapping[str, Any]
) -> User | None:
    """Lock, update and return the matching user in one transaction; None if absent."""
    if ref is None:
        return None
    user = _query_by_key(db, ref).with_for_update().first()
    if user is None:
        db.rollback()
        return None
    for column, value in fields.items():
        setattr(user, column, value)
    db.commit()
    return user


def delete_by_key(db: Session, ref: TargetRef | None) -> User | None:
    """Delete and return the matching user in one transaction; None if absent."""
    if ref is None:
        return None
    user = _query_by_key(db, ref).with_for_update().first()
    if user is None:
        db.rollback()
        return None
    db.delete(user)
    db.commit()
    return user


# -----------------------------------------------------------------------------
# Flows
# -----------------------------------------------------------------------------


def list_users(db: Session, claims: AuthClaims, page: int, limit: int) -> tuple[list[User], int]:
    policy.authorize_list_users(claims)
    return paginate(db.query(User).order_by(User.id), page, limit)


def get_user(db: Session, claims: AuthClaims, uid: str) -> User:
    policy.authorize_read_user(claims, uid)
    user = find_by_target(db, policy.parse_target(uid))
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return user


def create_user(db: Session, claims: AuthClaims, payload: Mapping[str, Any]) -> User:
    """Admin-only. Missing fields are rejected before the store is queried."""
    policy.authorize_create_user(claims)
    email, password, role = policy.validate_new_user(payload)
    if find_by_email(db, email) is not None:
        raise ConflictError(USER_EXISTS_MESSAGE)
    try:
        user = insert_user(db, email, hash_password(password), role)
    except IntegrityError:
        db.rollback()
        raise ConflictError(USER_EXISTS_MESSAGE)
    logger.info("Created user id=%s role=%s", user.id, user.role)
    return user


def _update_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if payload.get("email"):
        fields["email"] = str(payload["email"])
    if payload.get("password"):
        fields["password_hash"] = hash_password(str(payload["password"]))
    if "role" in payload:
        try:
            fields["role"] = Role.parse(payload["role"]).value
        except ValueError:
            raise ValidationError(f"Invalid role: {payload['role']!r}")
    return fields


def update_user(
    db: Session, claims: AuthClaims, uid: str, payload: Mapping[str, Any]
) -> User:
    """
    Empty-value validation runs before the authorization branch. Keys other
    than email, password and role are accepted and ignored.
    """
    policy.validate_user_update(payload)
    policy.authorize_update_user(claims, uid, payload)
    fields = _update_fields(payload)
    ref = policy.parse_target(uid)

    new_email = fields.get("email")
    if new_email is not None:
        owner = find_by_email(db, new_email)
        if owner is not None and find_by_target(db, ref) not in (None, owner):
            raise ConflictError(USER_EXISTS_MESSAGE)

    try:
        user = update_by_key(db, ref, fields)
    except IntegrityError:
        db.rollback()
        raise ConflictError(USER_EXISTS_MESSAGE)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    logger.info("Updated user id=%s fields=%s", user.id, sorted(fields))
    return user


def delete_user(db: Session, claims: AuthClaims, uid: str) -> User:
    policy.authorize_delete_user(claims, uid)
    user = delete_by_key(db, policy.parse_target(uid))
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    logger.info("Deleted user id=%s", user.id)
    return user
