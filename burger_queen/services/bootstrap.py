"""Bootstrap admin provisioning: make sure the configured admin account exists."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from burger_queen.core.security import hash_password
from burger_queen.services.authorization import Role
from burger_queen.services.users import find_by_email, insert_user

if TYPE_CHECKING:
    from burger_queen.core.config import Settings

logger = logging.getLogger(__name__)


def ensure_admin_user(session: Session, email: str, password: str) -> bool:
    """
    Create an admin user with this email unless one with the email already exists.

    Returns True if a user was inserted. Idempotent: safe to run on every start,
    including when another process inserts the same email concurrently.
    """
    if find_by_email(session, email) is not None:
        logger.info("Bootstrap admin already present: %s", email)
        return False
    try:
        insert_user(session, email, hash_password(password), Role.ADMIN)
    except IntegrityError:
        session.rollback()
        logger.info("Bootstrap admin created concurrently: %s", email)
        return False
    logger.info("Bootstrap admin created: %s", email)
    return True


def run_bootstrap(session: Session, settings: "Settings") -> bool:
    """Provision the admin from ADMIN_EMAIL/ADMIN_PASSWORD; no-op when either is unset."""
    if not settings.bootstrap_admin_enabled:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set; skipping bootstrap admin.")
        return False
    return ensure_admin_user(
        session,
        settings.ADMIN_EMAIL,
        settings.ADMIN_PASSWORD.get_secret_value(),
    )
