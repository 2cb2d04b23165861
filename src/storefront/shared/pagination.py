"""Paginated, sorted listing over a repository's DAO."""

import math
from dataclasses import dataclass, field
from typing import Any

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from protean.utils.reflection import declared_fields

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


@dataclass
class Page:
    items: list[Any] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    total_items: int = 0
    items_per_page: int = DEFAULT_PAGE_SIZE

    def to_pagination(self) -> dict:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_items": self.total_items,
            "items_per_page": self.items_per_page,
        }


def paginate(
    aggregate_cls,
    filters: dict | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
) -> Page:
    """Return one page of ``aggregate_cls`` records matching ``filters``.

    ``None`` filter values are ignored. Unknown sort fields and out-of-range
    page/limit values are rejected with a ValidationError.
    """
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be at least 1"]
    if limit < 1 or limit > MAX_PAGE_SIZE:
        errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]
    if sort not in declared_fields(aggregate_cls):
        errors["sort"] = [f"Cannot sort by '{sort}'"]
    if order not in ("asc", "desc"):
        errors["order"] = ["Order must be 'asc' or 'desc'"]
    if errors:
        raise ValidationError(errors)

    criteria = {key: value for key, value in (filters or {}).items() if value is not None}

    query = current_domain.repository_for(aggregate_cls)._dao.query
    if criteria:
        query = query.filter(**criteria)

    results = query.order_by(f"-{sort}" if order == "desc" else sort).offset((page - 1) * limit).limit(limit).all()

    return Page(
        items=results.items,
        current_page=page,
        total_pages=math.ceil(results.total / limit) if results.total else 0,
        total_items=results.total,
        items_per_page=limit,
    )
