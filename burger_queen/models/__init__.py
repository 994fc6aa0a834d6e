"""SQLAlchemy ORM models."""

from burger_queen.models.base import Base
from burger_queen.models.order import Order
from burger_queen.models.product import Product
from burger_queen.models.user import User

__all__ = ["Base", "Order", "Product", "User"]
