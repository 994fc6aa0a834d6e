"""Product catalog flows. Reads need any authenticated caller; writes are admin-only."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from burger_queen.core.errors import NotFoundError, ValidationError
from burger_queen.models import Product
from burger_queen.schemas.product import ProductCreate
from burger_queen.services import authorization as policy
from burger_queen.services.authorization import EMPTY_UPDATE_MESSAGE, AuthClaims
from burger_queen.services.pagination import paginate

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND_MESSAGE = "Product not found"
UPDATABLE_FIELDS = ("name", "price", "image", "type")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def find_product(db: Session, product_id: str, for_update: bool = False) -> Product | None:
    """Look up a product by object id; malformed ids find nothing."""
    if not policy.is_object_id(product_id):
        return None
    query = db.query(Product).filter(Product.id == product_id.lower())
    if for_update:
        query = query.with_for_update()
    return query.first()


def list_products(db: Session, page: int, limit: int) -> tuple[list[Product], int]:
    """Newest products first."""
    return paginate(
        db.query(Product).order_by(Product.date_entry.desc(), Product.id.desc()), page, limit
    )


def get_product(db: Session, product_id: str) -> Product:
    product = find_product(db, product_id)
    if product is None:
        raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)
    return product


def create_product(db: Session, claims: AuthClaims, body: ProductCreate) -> Product:
    policy.authorize_product_write(claims)
    if not body.name or not body.price:
        raise ValidationError("A product needs a name and a price")
    product = Product(name=body.name, price=body.price, image=body.image, type=body.type)
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Created product id=%s", product.id)
    return product


def validate_product_update(payload: Mapping[str, Any]) -> None:
    """Reject an empty body, empty-string fields, or a non-numeric price."""
    if not payload or any(payload.get(field) == "" for field in UPDATABLE_FIELDS):
        raise ValidationError(EMPTY_UPDATE_MESSAGE)
    if "price" in payload and not _is_number(payload["price"]):
        raise ValidationError("price must be a number")


def update_product(
    db: Session, claims: AuthClaims, product_id: str, payload: Mapping[str, Any]
) -> Product:
    policy.authorize_product_write(claims)
    validate_product_update(payload)
    product = find_product(db, product_id, for_update=True)
    if product is None:
        db.rollback()
        raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)
    for field in UPDATABLE_FIELDS:
        if field in payload:
            setattr(product, field, payload[field])
    db.commit()
    return product


def delete_product(db: Session, claims: AuthClaims, product_id: str) -> Product:
    policy.authorize_product_write(claims)
    product = find_product(db, product_id, for_update=True)
    if product is None:
        db.rollback()
        raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)
    db.delete(product)
    db.commit()
    logger.info("Deleted product id=%s", product.id)
    return product
