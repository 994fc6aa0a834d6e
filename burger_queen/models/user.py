"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, String

from burger_queen.models.base import OBJECT_ID_LENGTH, Base, new_object_id


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
