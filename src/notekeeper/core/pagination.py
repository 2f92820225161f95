"""Offset pagination helper."""

import math
from dataclasses import dataclass

from .schemas.common import PaginationMeta


@dataclass
class Pagination:
    limit: int
    start: int
    meta: PaginationMeta


def paginate(total: int, page: int, limit: int) -> Pagination:
    """Compute the offset for `page` (1-based) and the page info for the response."""
    start = limit * (page - 1)
    previous_page = page - 1
    meta = PaginationMeta(
        current_page=page,
        page_limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
        previous_page=previous_page if previous_page > 0 else None,
        next_page=page + 1 if limit * page < total else None,
    )
    return Pagination(limit=limit, start=start, meta=meta)
