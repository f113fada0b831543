from __future__ import annotations
import math
from typing import Sequence, TypeVar

T = TypeVar("T")

MAX_LIMIT = 50

def clamp_limit(limit, default: int = 10) -> int:
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, MAX_LIMIT))

def paginate(items: Sequence[T], page: int, limit: int) -> tuple[list[T], dict]:
    """1-based slice of ``items`` plus page metadata; out-of-range pages are empty."""
    total = len(items)
    total_pages = math.ceil(total / limit) if total else 0
    if page < 1:
        chunk = []
    else:
        start = (page - 1) * limit
        chunk = list(items[start:start + limit])
    meta = {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
    return chunk, meta
