"""Shared test helpers: in-memory SQLite store wired into the app through get_db."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from burger_queen.core.database import get_db
from burger_queen.core.security import create_access_token, hash_password
from burger_queen.main import app
from burger_queen.models import Base, User
from burger_queen.services.authorization import Role
from burger_queen.services.users import insert_user


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; one shared connection across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )


class ApiTestCase(unittest.TestCase):
    """TestClient against the real app with get_db pointed at a fresh SQLite store."""

    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        self.sessions_opened = 0

        def override_get_db() -> Generator[Session, None, None]:
            self.sessions_opened += 1
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)
        self.db = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        app.dependency_overrides.clear()

    def add_user(self, email: str, password: str = "secret", role: Role = Role.USER) -> User:
        return insert_user(self.db, email, hash_password(password), role)

    def headers_for(self, user: User) -> dict[str, str]:
        token = create_access_token(user_id=user.id, role=user.role, email=user.email)
        return {"Authorization": f"Bearer {token}"}

    def reload_user(self, email: str) -> User | None:
        self.db.expire_all()
        return self.db.query(User).filter(User.email == email).first()
