"""Pydantic request/response schemas."""

from burger_queen.schemas.auth import LoginRequest, TokenResponse
from burger_queen.schemas.health import HealthResponse
from burger_queen.schemas.order import OrderCreate, OrderItemIn, OrderItemOut, OrderOut
from burger_queen.schemas.product import ProductCreate, ProductOut
from burger_queen.schemas.user import UserCreate, UserOut

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "OrderCreate",
    "OrderItemIn",
    "OrderItemOut",
    "OrderOut",
    "ProductCreate",
    "ProductOut",
    "TokenResponse",
    "UserCreate",
    "UserOut",
]
