"""
Critical review finder.

A review is critical when its comment contains the contrastive marker
``dar`` ("but"), in any case. The whole matching set is loaded; there is
no pagination.
"""

from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reviews_api.core.constants import (
    CRITICAL_REVIEW_MARKER,
    EMPTY_COMMENT_PLACEHOLDER,
    UNKNOWN_REFERENCE_NAME,
)
from reviews_api.repositories.catalog_repository import (
    ProductRepository,
    ReviewRepository,
    UserRepository,
)
from reviews_api.services.base_service import BaseService


def _display_name(record) -> str:
    if record is None or not record.name:
        return UNKNOWN_REFERENCE_NAME
    return record.name


class CriticalReviewService(BaseService):
    def __init__(self, db_session: Session, marker: str = CRITICAL_REVIEW_MARKER):
        super().__init__(db_session)
        self.marker = marker
        self.reviews = ReviewRepository(db_session)
        self.users = UserRepository(db_session)
        self.products = ProductRepository(db_session)

    def find_critical_reviews(self) -> Dict[str, Any]:
        """
        Returns:
            ``{"total", "reviews": [{"comment", "user", "product"}]}`` with
            user and product resolved to display names
        """
        try:
            reviews = self.reviews.find_by_comment_fragment(self.marker)
            users = {u.id: u for u in self.users.find_by_ids(r.user_id for r in reviews)}
            products = {p.id: p for p in self.products.find_by_ids(r.product_id for r in reviews)}
        except SQLAlchemyError as e:
            raise self._query_failed(e, "critical_reviews", "Failed to analyze reviews.") from e

        results = [
            {
                "comment": (review.comment or "").strip() or EMPTY_COMMENT_PLACEHOLDER,
                "user": _display_name(users.get(review.user_id)),
                "product": _display_name(products.get(review.product_id)),
            }
            for review in reviews
        ]
        self._logger.info("critical_reviews_found", total=len(results))
        return {"total": len(results), "reviews": results}
