"""Pagination helper for SQLAlchemy queries."""

from __future__ import annotations

import math
from typing import Any, Dict

from sqlalchemy.orm import Query


def paginate(query: Query, page: int = 1, per_page: int = 20) -> Dict[str, Any]:
    page = max(page, 1)
    per_page = max(min(per_page, 100), 1)
    total = query.order_by(None).count()
    pages = max(math.ceil(total / per_page), 1)
    items = query.limit(per_page).offset((page - 1) * per_page).all()
    return {
        "items": items,
        "page": page,
        "per_page": per_page,
        "total": total,
        "pages": pages,
        "has_prev": page > 1,
        "has_next": page < pages,
    }


def page_arg(value: Any, default: int = 1) -> int:
    """Parse a ``?page=`` value, falling back to ``default`` on junk."""
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return default
