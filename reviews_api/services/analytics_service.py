"""
Aggregation reports over the whole software review collection.

Reports are parameterless and ignore list filters.
"""

from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from reviews_api.models.base import plain_number
from reviews_api.repositories.software_review_repository import SoftwareReviewRepository
from reviews_api.services.base_service import BaseService


class AnalyticsService(BaseService):
    """Summary statistics and histograms for the dashboard."""

    def __init__(self, db_session):
        super().__init__(db_session)
        self.repository = SoftwareReviewRepository(db_session)

    def summary_stats(self) -> Dict[str, Any]:
        """
        Average rating, total count and verified share.

        Returns:
            ``{"avgRating", "totalReviews", "verifiedPercent"}`` with both
            ratios rounded to 2 decimals, or ``{}`` for an empty collection
        """
        try:
            stats = self.repository.summary_stats()
        except SQLAlchemyError as e:
            raise self._query_failed(e, "summary_stats", "Aggregation failed.") from e

        if stats is None:
            return {}

        avg_rating = stats["avg_rating"]
        return {
            "avgRating": round(avg_rating, 2) if avg_rating is not None else None,
            "totalReviews": stats["total"],
            "verifiedPercent": round(100 * stats["verified"] / stats["total"], 2),
        }

    def ratings_distribution(self) -> List[Dict[str, Any]]:
        """Review count per rating, ascending by rating."""
        try:
            rows = self.repository.rating_histogram()
        except SQLAlchemyError as e:
            raise self._query_failed(
                e, "ratings_distribution", "Failed to compute ratings distribution."
            ) from e
        return [{"_id": plain_number(rating), "count": count} for rating, count in rows]

    def reviews_per_year(self) -> List[Dict[str, Any]]:
        """Review count per UTC year of the review timestamp, ascending."""
        try:
            rows = self.repository.year_histogram()
        except SQLAlchemyError as e:
            raise self._query_failed(
                e, "reviews_per_year", "Failed to compute yearly distribution."
            ) from e
        return [{"_id": year, "count": count} for year, count in rows]
