"""Product endpoints: authenticated reads, admin-only writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.orm import Session

from burger_queen.api.v1.auth import get_current_claims
from burger_queen.core.config import get_settings
from burger_queen.core.database import get_db
from burger_queen.schemas.product import ProductCreate, ProductOut
from burger_queen.services import products as product_service
from burger_queen.services.authorization import AuthClaims
from burger_queen.services.pagination import build_link_header, resolve_limit

router = APIRouter()


@router.get("", response_model=list[ProductOut])
def list_products(
    response: Response,
    _claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[ProductOut]:
    settings = get_settings()
    limit = resolve_limit(limit, settings)
    products, total = product_service.list_products(db, page, limit)
    response.headers["Link"] = build_link_header(
        f"{settings.API_PREFIX}/products", page, limit, total
    )
    return [ProductOut.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: str,
    _claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> ProductOut:
    return ProductOut.model_validate(product_service.get_product(db, product_id))


@router.post("", response_model=ProductOut)
def create_product(
    body: ProductCreate,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> ProductOut:
    return ProductOut.model_validate(product_service.create_product(db, claims, body))


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
    body: Annotated[dict[str, Any], Body()],
) -> ProductOut:
    product = product_service.update_product(db, claims, product_id, body)
    return ProductOut.model_validate(product)


@router.delete("/{product_id}", response_model=ProductOut)
def delete_product(
    product_id: str,
    claims: Annotated[AuthClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> ProductOut:
    return ProductOut.model_validate(product_service.delete_product(db, claims, product_id))
