"""ORM model for customer orders."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String

from burger_queen.models.base import OBJECT_ID_LENGTH, Base, new_object_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    """
    An order taken for a client.

    products holds the line items as a JSON list of {"qty": int, "product": {...}}.
    status is one of ORDER_STATUSES in burger_queen.services.authorization.
    """

    __tablename__ = "orders"

    id = Column(String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id)
    user_id = Column(String(255), nullable=False, index=True)
    client = Column(String(255), nullable=True)
    products = Column(JSON, nullable=False, default=list)
    status = Column(String(32), nullable=False, default="pending")
    date_entry = Column(DateTime(timezone=True), nullable=False, default=_utc_now)
    date_processed = Column(DateTime(timezone=True), nullable=True)
