"""Request/response schemas for product endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """Body for POST /products; name and price presence is checked by the service."""

    name: str | None = Field(default=None, max_length=255)
    price: float | None = None
    image: str | None = Field(default=None, max_length=2048)
    type: str | None = Field(default=None, max_length=64)


class ProductOut(BaseModel):
    """Product as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    price: float
    image: str | None = None
    type: str | None = None
    date_entry: datetime | None = Field(default=None, serialization_alias="dateEntry")
