"""Request/response schemas for order endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OrderItemIn(BaseModel):
    """Line item on order creation: reference a product by id or embed it."""

    qty: int = Field(default=1, ge=1, description="Quantity of this product")
    product_id: str | None = Field(default=None, alias="productId")
    product: dict[str, Any] | None = None

    model_config = ConfigDict(populate_by_name=True)


class OrderCreate(BaseModel):
    """Body for POST /orders; userId and products presence is checked by the service."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    client: str | None = Field(default=None, max_length=255)
    products: list[OrderItemIn] | None = None


class OrderItemOut(BaseModel):
    qty: int
    product: dict[str, Any] | None = None


class OrderOut(BaseModel):
    """Order as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str = Field(serialization_alias="userId")
    client: str | None = None
    products: list[OrderItemOut] = Field(default_factory=list)
    status: str
    date_entry: datetime | None = Field(default=None, serialization_alias="dateEntry")
    date_processed: datetime | None = Field(
        default=None, serialization_alias="dateProcessed"
    )
