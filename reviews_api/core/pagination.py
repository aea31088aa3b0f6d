# reviews_api/core/pagination.py
"""
Core pagination helpers.

This module provides:
- `parse_int` to read an integer out of a raw query-string value.
- `normalize_pagination` to clean up page/limit inputs using defaults
  and clamping.

Out-of-range values are clamped, never rejected.
"""

from __future__ import annotations

from typing import Optional

from reviews_api.core.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, MAX_OFFSET
from reviews_api.schemas.common import PaginationParams


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Return ``raw`` as an int, or None when it is absent or malformed."""
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def normalize_pagination(
    page: Optional[str],
    limit: Optional[str],
) -> PaginationParams:
    """
    Normalize raw page & limit inputs into a PaginationParams object
    with sane defaults and a clamped max limit.

    Rules:
        - page unparsable or None -> DEFAULT_PAGE
        - page < 1 -> 1
        - limit unparsable or None -> DEFAULT_LIMIT
        - limit clamped to [1, MAX_LIMIT]
        - page clamped so the row offset stays within MAX_OFFSET
    """
    page_value = parse_int(page)
    if page_value is None:
        page_value = DEFAULT_PAGE
    page_value = max(1, page_value)

    limit_value = parse_int(limit)
    if limit_value is None:
        limit_value = DEFAULT_LIMIT
    limit_value = min(MAX_LIMIT, max(1, limit_value))
    page_value = min(page_value, MAX_OFFSET // limit_value + 1)

    return PaginationParams(page=page_value, limit=limit_value)
