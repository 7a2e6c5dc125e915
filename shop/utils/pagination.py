"""Pagination and sort-parameter helpers for list endpoints."""
from typing import Any, Dict, Iterable, Optional, Tuple

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
SORT_ORDERS = ("asc", "desc")


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_pagination(
    page: Any = 1,
    limit: Any = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> Tuple[int, int, int]:
    """
    Clamp raw query values.

    Returns:
        (page, limit, offset) with page >= 1 and 1 <= limit <= max_limit
    """
    page_num = max(1, _to_int(page, 1))
    limit_num = _to_int(limit, DEFAULT_PAGE_SIZE) or DEFAULT_PAGE_SIZE
    limit_num = min(max_limit, max(1, limit_num))
    return page_num, limit_num, (page_num - 1) * limit_num


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    total_pages = (total + limit - 1) // limit if limit else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }


def safe_sort(
    sort_by: Optional[str],
    sort_order: Optional[str],
    allowed: Iterable[str],
    default_field: str = "createdAt",
    default_order: str = "desc",
) -> Tuple[str, str]:
    """Fall back to defaults for sort fields/orders outside the whitelist."""
    field = sort_by if sort_by in set(allowed) else default_field
    order = sort_order if sort_order in SORT_ORDERS else default_order
    return field, order
