"""
Authorization policy: who may read or write which resource.

Pure functions over verified token claims and request targets. Nothing here
touches HTTP or the database; handlers call the ``authorize_*`` and
``validate_*`` functions and let the raised errors map to status codes.

Rules:
- users: list and create are admin-only; read, update and delete are allowed
  for the user themselves (matched by id or email) or an admin. A non-admin
  may never change a role, not even their own.
- products: writes are admin-only; reads need any authenticated caller.
- orders: read and create need any authenticated caller; update and delete
  are admin-only.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from burger_queen.core.errors import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

# "preparing" is accepted on update alongside the four documented states.
ORDER_STATUSES = frozenset({"pending", "canceled", "preparing", "delivering", "delivered"})

EMPTY_UPDATE_MESSAGE = "Values to update cannot be empty"
USER_FORBIDDEN_MESSAGE = "You are not authorized to make this request"
ROLE_CHANGE_FORBIDDEN_MESSAGE = "You are not authorized to change the user role"
ADMIN_REQUIRED_MESSAGE = "Admin access required"


class Role(str, Enum):
    """Closed set of user roles."""

    ADMIN = "admin"
    USER = "user"

    @classmethod
    def parse(cls, value: Any) -> Role:
        """
        Normalize a stored or submitted role.

        Accepts the string tags, a boolean admin flag, or a ``{"admin": bool}``
        mapping. Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.ADMIN if value else cls.USER
        if isinstance(value, Mapping):
            return cls.ADMIN if value.get("admin") is True else cls.USER
        if isinstance(value, str):
            return cls(value.strip().lower())
        raise ValueError(f"Unrecognized role: {value!r}")


@dataclass(frozen=True)
class AuthClaims:
    """Verified token payload for the current request."""

    user_id: str
    email: str
    role: Role
    # Legacy identity signal; historically set alongside email by the auth middleware.
    this_email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @classmethod
    def from_token_payload(cls, payload: Mapping[str, Any]) -> AuthClaims:
        """Build claims from a decoded JWT payload. Raises ValueError if incomplete."""
        user_id = payload.get("userId")
        email = payload.get("email")
        if not user_id or not email:
            raise ValueError("Token payload must carry userId and email")
        raw_role = payload.get("role", payload.get("rol"))
        try:
            role = Role.parse(raw_role)
        except ValueError:
            role = Role.USER
        return cls(
            user_id=str(user_id),
            email=str(email),
            role=role,
            this_email=payload.get("thisEmail", email),
        )


@dataclass(frozen=True)
class ById:
    """Target addressed by record identifier."""

    id: str


@dataclass(frozen=True)
class ByEmail:
    """Target addressed by email."""

    email: str


TargetRef = ById | ByEmail


def is_object_id(value: str) -> bool:
    """True if value looks like a 24-hex-character record identifier."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.match(value) is not None


def parse_target(raw: str) -> TargetRef | None:
    """
    Resolve a path parameter into a lookup key.

    Strings containing '@' are emails; 24 hex characters are identifiers
    (normalized to lowercase). Anything else returns None, which callers
    report as not found.
    """
    if "@" in raw:
        return ByEmail(raw)
    if is_object_id(raw):
        return ById(raw.lower())
    return None


def is_self(claims: AuthClaims, target: str) -> bool:
    """True if any of the caller's identity signals names the target."""
    ref = parse_target(target)
    if isinstance(ref, ById) and claims.user_id.lower() == ref.id:
        return True
    return (
        claims.user_id == target
        or claims.email == target
        or (claims.this_email is not None and claims.this_email == target)
    )


def is_self_or_admin(claims: AuthClaims, target: str) -> bool:
    return is_self(claims, target) or claims.is_admin


# -----------------------------------------------------------------------------
# Predicates
# -----------------------------------------------------------------------------


def can_list_users(claims: AuthClaims) -> bool:
    return claims.is_admin


def can_create_user(claims: AuthClaims) -> bool:
    return claims.is_admin


def can_read_user(claims: AuthClaims, target: str) -> bool:
    return is_self_or_admin(claims, target)


def can_update_user(claims: AuthClaims, target: str, payload: Mapping[str, Any]) -> bool:
    if not is_self_or_admin(claims, target):
        return False
    return claims.is_admin or "role" not in payload


def can_delete_user(claims: AuthClaims, target: str) -> bool:
    return is_self_or_admin(claims, target)


def can_write_product(claims: AuthClaims) -> bool:
    return claims.is_admin


def can_read_order(claims: AuthClaims) -> bool:
    return True


def can_create_order(claims: AuthClaims) -> bool:
    return True


def can_update_order(claims: AuthClaims) -> bool:
    return claims.is_admin


def can_delete_order(claims: AuthClaims) -> bool:
    return claims.is_admin


# -----------------------------------------------------------------------------
# Enforcement
# -----------------------------------------------------------------------------


def _deny(claims: AuthClaims, operation: str, message: str) -> AuthorizationError:
    logger.info(
        "Denied %s for user_id=%s role=%s", operation, claims.user_id, claims.role.value
    )
    return AuthorizationError(message)


def require_admin(claims: AuthClaims, operation: str = "admin operation") -> None:
    """Raise AuthorizationError unless the caller is an admin."""
    if not claims.is_admin:
        raise _deny(claims, operation, ADMIN_REQUIRED_MESSAGE)


def authorize_list_users(claims: AuthClaims) -> None:
    if not can_list_users(claims):
        raise _deny(claims, "list users", ADMIN_REQUIRED_MESSAGE)


def authorize_read_user(claims: AuthClaims, target: str) -> None:
    if not can_read_user(claims, target):
        raise _deny(claims, "read user", USER_FORBIDDEN_MESSAGE)


def authorize_create_user(claims: AuthClaims) -> None:
    if not can_create_user(claims):
        raise _deny(claims, "create user", ADMIN_REQUIRED_MESSAGE)


def authorize_delete_user(claims: AuthClaims, target: str) -> None:
    if not can_delete_user(claims, target):
        raise _deny(claims, "delete user", USER_FORBIDDEN_MESSAGE)


def authorize_update_user(
    claims: AuthClaims, target: str, payload: Mapping[str, Any]
) -> None:
    """
    Self-or-admin may update; a non-admin payload carrying ``role`` is denied
    even when the record is the caller's own.
    """
    if not is_self_or_admin(claims, target):
        raise _deny(claims, "update user", USER_FORBIDDEN_MESSAGE)
    if not claims.is_admin and "role" in payload:
        raise _deny(claims, "change role", ROLE_CHANGE_FORBIDDEN_MESSAGE)


def authorize_product_write(claims: AuthClaims) -> None:
    if not can_write_product(claims):
        raise _deny(claims, "product write", ADMIN_REQUIRED_MESSAGE)


def authorize_order_update(claims: AuthClaims) -> None:
    if not can_update_order(claims):
        raise _deny(claims, "order update", ADMIN_REQUIRED_MESSAGE)


def authorize_order_delete(claims: AuthClaims) -> None:
    if not can_delete_order(claims):
        raise _deny(claims, "order delete", ADMIN_REQUIRED_MESSAGE)


# -----------------------------------------------------------------------------
# Input validation
# -----------------------------------------------------------------------------


def validate_new_user(payload: Mapping[str, Any]) -> tuple[str, str, Role]:
    """
    Require non-empty email, password and role for user creation.

    Returns (email, password, role). Raises ValidationError before any store
    access when a field is missing or the role is not recognized.
    """
    email = payload.get("email")
    password = payload.get("password")
    raw_role = payload.get("role")
    if not email or not password or raw_role in (None, "", False):
        raise ValidationError("email, password and role are required")
    try:
        role = Role.parse(raw_role)
    except ValueError:
        raise ValidationError(f"Invalid role: {raw_role!r}")
    return str(email), str(password), role


def validate_user_update(payload: Mapping[str, Any]) -> None:
    """Reject an empty body, or an email/password given as the empty string."""
    if not payload or payload.get("email") == "" or payload.get("password") == "":
        raise ValidationError(EMPTY_UPDATE_MESSAGE)


def validate_order_status(status: Any) -> str:
    """Return status if it is a recognized order state, else raise ValidationError."""
    if not isinstance(status, str) or status not in ORDER_STATUSES:
        raise ValidationError(f"Invalid order status: {status!r}")
    return status
