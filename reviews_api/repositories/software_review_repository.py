"""
Software Review Repository - filtered pages and aggregate reports.

Aggregations run over the full collection; list filters never reach them.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from reviews_api.db.expressions import utc_year
from reviews_api.models.software_review import SoftwareReview
from reviews_api.repositories.base_repository import BaseRepository
from reviews_api.repositories.filtering import apply_filters, order_clauses
from reviews_api.services.query_builder import ReviewQuery


class SoftwareReviewRepository(BaseRepository[SoftwareReview]):
    """Repository for software review queries and reports."""

    def __init__(self, db: Session):
        super().__init__(SoftwareReview, db)

    # ==================== Filtered Queries ====================

    def find_page(self, query: ReviewQuery) -> List[SoftwareReview]:
        """
        Fetch one page of reviews matching ``query``.

        Args:
            query: Filters, sort keys and skip/limit window

        Returns:
            At most ``query.limit`` reviews in sort order
        """
        stmt = apply_filters(select(SoftwareReview), SoftwareReview, query.filters)
        stmt = (
            stmt.order_by(*order_clauses(SoftwareReview, query.sort))
            .offset(query.skip)
            .limit(query.limit)
        )
        return list(self.db.scalars(stmt))

    def count_matching(self, query: ReviewQuery) -> int:
        """Count every review matching ``query``, ignoring the window."""
        stmt = apply_filters(
            select(func.count()).select_from(SoftwareReview),
            SoftwareReview,
            query.filters,
        )
        return self.db.scalar(stmt) or 0

    # ==================== Aggregations ====================

    def summary_stats(self) -> Optional[Dict[str, Any]]:
        """
        Average rating, total count and verified count.

        Returns:
            None when the collection is empty
        """
        row = self.db.execute(
            select(
                func.avg(SoftwareReview.rating),
                func.count(SoftwareReview.id),
                func.sum(case((SoftwareReview.verified_purchase == True, 1), else_=0)),  # noqa: E712
            )
        ).one()
        avg_rating, total, verified = row
        if not total:
            return None
        return {
            "avg_rating": float(avg_rating) if avg_rating is not None else None,
            "total": int(total),
            "verified": int(verified or 0),
        }

    def rating_histogram(self) -> List[Tuple[Optional[float], int]]:
        """Count reviews per distinct rating, ascending, null first."""
        stmt = (
            select(SoftwareReview.rating, func.count(SoftwareReview.id))
            .group_by(SoftwareReview.rating)
            .order_by(SoftwareReview.rating.asc().nulls_first())
        )
        return [(rating, int(count)) for rating, count in self.db.execute(stmt)]

    def year_histogram(self) -> List[Tuple[Optional[int], int]]:
        """Count reviews per UTC year of their timestamp, ascending, null first."""
        year = utc_year(SoftwareReview.timestamp).label("review_year")
        stmt = (
            select(year, func.count(SoftwareReview.id))
            .group_by(year)
            .order_by(year.asc().nulls_first())
        )
        return [
            (int(value) if value is not None else None, int(count))
            for value, count in self.db.execute(stmt)
        ]
