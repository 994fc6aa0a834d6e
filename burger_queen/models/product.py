"""ORM model for catalog products."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, String

from burger_queen.models.base import OBJECT_ID_LENGTH, Base, new_object_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """A menu item that orders reference."""

    __tablename__ = "products"

    id = Column(String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(2048), nullable=True)
    type = Column(String(64), nullable=True)
    date_entry = Column(DateTime(timezone=True), nullable=False, default=_utc_now)
