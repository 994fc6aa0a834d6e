"""Page/limit handling and RFC 8288 Link headers for list endpoints."""

import math
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Query

if TYPE_CHECKING:
    from burger_queen.core.config import Settings


def resolve_limit(limit: int | None, settings: "Settings") -> int:
    """Apply the configured default and cap to a requested page size."""
    if limit is None:
        return settings.DEFAULT_PAGE_LIMIT
    return max(1, min(limit, settings.MAX_PAGE_LIMIT))


def last_page(total: int, limit: int) -> int:
    """Number of the last page; an empty collection still has page 1."""
    return max(1, math.ceil(total / limit))


def paginate(query: Query, page: int, limit: int) -> tuple[list[Any], int]:
    """Return (items on the requested page, total count) for a query."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, total


def build_link_header(path: str, page: int, limit: int, total: int) -> str:
    """
    Build the Link header value with first, prev, next and last relations.

    prev and next are clamped to the valid page range.
    """
    last = last_page(total, limit)
    pages = {
        "first": 1,
        "prev": min(last, max(1, page - 1)),
        "next": min(last, page + 1),
        "last": last,
    }
    return ", ".join(
        f'<{path}?page={number}&limit={limit}>; rel="{rel}"' for rel, number in pages.items()
    )
