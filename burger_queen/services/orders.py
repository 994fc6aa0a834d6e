"""Order flows. Any authenticated caller may read and create; update and delete are admin-only."""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from burger_queen.core.errors import AuthorizationError, NotFoundError, ValidationError
from burger_queen.models import Order, Product
from burger_queen.schemas.order import OrderCreate, OrderItemIn
from burger_queen.services import authorization as policy
from burger_queen.services.authorization import EMPTY_UPDATE_MESSAGE, AuthClaims
from burger_queen.services.pagination import paginate
from burger_queen.services.products import find_product

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND_MESSAGE = "Order not found"

# PATCH body key -> column. Empty-string values for any of these are rejected.
UPDATABLE_FIELDS = {
    "userId": "user_id",
    "client": "client",
    "products": "products",
    "status": "status",
    "dateEntry": "date_entry",
    "dateProcessed": "date_processed",
}

_datetime_adapter = TypeAdapter(datetime)
_items_adapter = TypeAdapter(list[OrderItemIn])


def _find(db: Session, order_id: str, for_update: bool = False) -> Order | None:
    if not policy.is_object_id(order_id):
        return None
    query = db.query(Order).filter(Order.id == order_id.lower())
    if for_update:
        query = query.with_for_update()
    return query.first()


def _product_snapshot(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "image": product.image,
        "type": product.type,
    }


def _resolve_item(db: Session, item: OrderItemIn) -> dict[str, Any]:
    """Embed the referenced product so the order keeps the price it was taken at."""
    if item.product_id is not None:
        product = find_product(db, item.product_id)
        if product is None:
            raise ValidationError(f"Unknown product: {item.product_id}")
        return {"qty": item.qty, "product": _product_snapshot(product)}
    if item.product:
        return {"qty": item.qty, "product": dict(item.product)}
    raise ValidationError("Each order item needs a productId or a product")


def list_orders(
    db: Session, claims: AuthClaims, page: int, limit: int
) -> tuple[list[Order], int]:
    if not policy.can_read_order(claims):
        raise AuthorizationError(policy.USER_FORBIDDEN_MESSAGE)
    return paginate(
        db.query(Order).order_by(Order.date_entry.desc(), Order.id.desc()), page, limit
    )


def get_order(db: Session, claims: AuthClaims, order_id: str) -> Order:
    if not policy.can_read_order(claims):
        raise AuthorizationError(policy.USER_FORBIDDEN_MESSAGE)
    order = _find(db, order_id)
    if order is None:
        raise NotFoundError(ORDER_NOT_FOUND_MESSAGE)
    return order


def create_order(db: Session, claims: AuthClaims, body: OrderCreate) -> Order:
    """New orders start as pending; userId and at least one product are required."""
    if not policy.can_create_order(claims):
        raise AuthorizationError(policy.USER_FORBIDDEN_MESSAGE)
    if not body.user_id or not body.products:
        raise ValidationError("userId and products are required to create an order")
    items = [_resolve_item(db, item) for item in body.products]
    order = Order(
        user_id=body.user_id,
        client=body.client,
        products=items,
        status="pending",
        date_entry=datetime.now(timezone.utc),
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Created order id=%s by user_id=%s", order.id, claims.user_id)
    return order


def _coerce_update(db: Session, payload: Mapping[str, Any]) -> dict[str, Any]:
    """Map a PATCH body onto column values, validating status, dates and items."""
    values: dict[str, Any] = {}
    for key, column in UPDATABLE_FIELDS.items():
        if key not in payload:
            continue
        value = payload[key]
        if key == "status":
            value = policy.validate_order_status(value)
        elif key in ("dateEntry", "dateProcessed") and value is not None:
            try:
                value = _datetime_adapter.validate_python(value)
            except PydanticValidationError:
                raise ValidationError(f"{key} must be an ISO 8601 date")
        elif key == "products":
            try:
                items = _items_adapter.validate_python(value)
            except PydanticValidationError:
                raise ValidationError("products must be a list of {qty, productId or product}")
            value = [_resolve_item(db, item) for item in items]
        values[column] = value
    if values.get("status") == "delivered" and "date_processed" not in values:
        values["date_processed"] = datetime.now(timezone.utc)
    return values


def update_order(
    db: Session, claims: AuthClaims, order_id: str, payload: Mapping[str, Any]
) -> Order:
    """
    Empty-value validation runs before the admin check. A status, when given,
    must be one of the recognized order states.
    """
    if not payload or any(payload.get(key) == "" for key in UPDATABLE_FIELDS):
        raise ValidationError(EMPTY_UPDATE_MESSAGE)
    policy.authorize_order_update(claims)
    if not policy.is_object_id(order_id):
        raise NotFoundError(ORDER_NOT_FOUND_MESSAGE)
    values = _coerce_update(db, payload)
    order = _find(db, order_id, for_update=True)
    if order is None:
        db.rollback()
        raise NotFoundError(ORDER_NOT_FOUND_MESSAGE)
    for column, value in values.items():
        setattr(order, column, value)
    db.commit()
    logger.info("Updated order id=%s fields=%s", order.id, sorted(values))
    return order


def delete_order(db: Session, claims: AuthClaims, order_id: str) -> Order:
    policy.authorize_order_delete(claims)
    order = _find(db, order_id, for_update=True)
    if order is None:
        db.rollback()
        raise NotFoundError(ORDER_NOT_FOUND_MESSAGE)
    db.delete(order)
    db.commit()
    logger.info("Deleted order id=%s", order.id)
    return order
