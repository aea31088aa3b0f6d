"""
Fluent builder for software review list queries.

Turns raw query-string values into a ``ReviewQuery``: filter conditions,
sort keys and a skip/limit window. The descriptor knows nothing about the
store; ``reviews_api.repositories.filtering`` translates it to SQL.

Malformed numeric parameters never raise, they are treated as absent.
"""

import calendar
import math
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Union

from reviews_api.core.pagination import normalize_pagination, parse_int

__all__ = [
    "FilterOp",
    "OrderDirection",
    "Condition",
    "AnyOf",
    "SortKey",
    "ReviewQuery",
    "ReviewQueryBuilder",
    "SORT_OPTIONS",
    "year_bounds_ms",
]


class FilterOp(str, Enum):
    """Filter operators understood by the translator."""
    CONTAINS_CI = "contains_ci"
    GTE = "gte"
    EQ = "eq"
    RANGE = "range"  # half-open [low, high)


class OrderDirection(str, Enum):
    """Order direction."""
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Condition:
    field: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """Matches when at least one of its conditions does."""
    conditions: Tuple[Condition, ...]


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: OrderDirection


# Insertion-order key, used as default sort and as tiebreaker
ID_FIELD = "id"

SORT_OPTIONS = {
    "rating_desc": SortKey("rating", OrderDirection.DESC),
    "rating_asc": SortKey("rating", OrderDirection.ASC),
    "date_desc": SortKey("timestamp", OrderDirection.DESC),
    "date_asc": SortKey("timestamp", OrderDirection.ASC),
}


@dataclass
class ReviewQuery:
    """Store-agnostic description of one page of software reviews."""

    filters: List[Union[Condition, AnyOf]] = field(default_factory=list)
    sort: List[SortKey] = field(default_factory=list)
    page: int = 1
    skip: int = 0
    limit: int = 50


def year_bounds_ms(year: int) -> Optional[Tuple[int, int]]:
    """
    Epoch-millisecond bounds of a UTC calendar year.

    Returns None for years the calendar cannot represent.
    """
    if not MINYEAR <= year < MAXYEAR:
        return None
    start = calendar.timegm((year, 1, 1, 0, 0, 0, 0, 0, 0)) * 1000
    end = calendar.timegm((year + 1, 1, 1, 0, 0, 0, 0, 0, 0)) * 1000
    return start, end


def _parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


class ReviewQueryBuilder:
    """
    Fluent builder for ``ReviewQuery``.

    Usage:
        query = (
            ReviewQueryBuilder()
            .search("battery")
            .min_rating("3")
            .sort_by("rating_desc")
            .paginate("2", "20")
            .build()
        )
    """

    def __init__(self):
        self._filters: List[Union[Condition, AnyOf]] = []
        self._sort: Optional[SortKey] = None
        self._page = 1
        self._limit = 50

    @classmethod
    def from_params(cls, params: Mapping[str, Optional[str]]) -> "ReviewQueryBuilder":
        """Build from raw query parameters keyed by their wire names."""
        return (
            cls()
            .search(params.get("q"))
            .min_rating(params.get("minRating"))
            .verified(params.get("verified"))
            .year(params.get("year"))
            .sort_by(params.get("sort"))
            .paginate(params.get("page"), params.get("limit"))
        )

    # ==================== Filter Methods ====================

    def search(self, q: Optional[str]) -> "ReviewQueryBuilder":
        """Case-insensitive literal substring match on title OR text."""
        if q:
            self._filters.append(
                AnyOf((
                    Condition("title", FilterOp.CONTAINS_CI, q),
                    Condition("text", FilterOp.CONTAINS_CI, q),
                ))
            )
        return self

    def min_rating(self, raw: Optional[str]) -> "ReviewQueryBuilder":
        value = _parse_float(raw)
        if value is not None:
            self._filters.append(Condition("rating", FilterOp.GTE, value))
        return self

    def verified(self, raw: Optional[str]) -> "ReviewQueryBuilder":
        # Only the literal "true" filters; "false" is the same as absent
        if raw == "true":
            self._filters.append(Condition("verified_purchase", FilterOp.EQ, True))
        return self

    def year(self, raw: Optional[str]) -> "ReviewQueryBuilder":
        value = parse_int(raw)
        if value is None:
            return self
        bounds = year_bounds_ms(value)
        if bounds is not None:
            self._filters.append(Condition("timestamp", FilterOp.RANGE, bounds))
        return self

    # ==================== Ordering & Paging ====================

    def sort_by(self, option: Optional[str]) -> "ReviewQueryBuilder":
        self._sort = SORT_OPTIONS.get(option or "")
        return self

    def paginate(self, page: Optional[str], limit: Optional[str]) -> "ReviewQueryBuilder":
        params = normalize_pagination(page, limit)
        self._page = params.page
        self._limit = params.limit
        return self

    def build(self) -> ReviewQuery:
        sort = [self._sort] if self._sort else []
        sort.append(SortKey(ID_FIELD, OrderDirection.DESC))
        return ReviewQuery(
            filters=list(self._filters),
            sort=sort,
            page=self._page,
            skip=(self._page - 1) * self._limit,
            limit=self._limit,
        )
