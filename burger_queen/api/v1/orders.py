"""Order endpoints: any authenticated caller reads and creates; admins update and delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.orm import Session

from burger_queen.api.v1.auth import get_current_claims
from burger_queen.core.config import get_settings
from burger_queen.core.database import get_db
from burger_queen.schemas.order import OrderCreate, OrderOut
from burger_queen.services import orders as order_service
from burger_queen.services.authorization import AuthClaims
from burger_queen.services.pagination import build_link_header, resolve_limit

router = APIRouter()


@router.get("", response_model=list[OrderOut])
def list_orders(
    response: Response,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[OrderOut]:
    settings = get_settings()
    limit = resolve_limit(limit, settings)
    orders, total = order_service.list_orders(db, claims, page, limit)
    response.headers["Link"] = build_link_header(
        f"{settings.API_PREFIX}/orders", page, limit, total
    )
    return [OrderOut.model_validate(o) for o in orders]


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderOut:
    return OrderOut.model_validate(order_service.get_order(db, claims, order_id))


@router.post("", response_model=OrderOut)
def create_order(
    body: OrderCreate,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderOut:
    """Create an order with status 'pending'. Items may reference a product by productId."""
    return OrderOut.model_validate(order_service.create_order(db, claims, body))


@router.patch("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    body: Annotated[dict[str, Any], Body()],
) -> OrderOut:
    """
    Edit an order (admin only). status must be pending, canceled, preparing,
    delivering or delivered; moving to delivered stamps dateProcessed.
    """
    return OrderOut.model_validate(order_service.update_order(db, claims, order_id, body))


@router.delete("/{order_id}", response_model=OrderOut)
def delete_order(
    order_id: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderOut:
    return OrderOut.model_validate(order_service.delete_order(db, claims, order_id))
