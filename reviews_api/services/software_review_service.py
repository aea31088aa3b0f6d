"""
Paginated, filterable, sortable listing of software reviews.

The page fetch and the total count are independent reads. When
``CONCURRENT_READS`` is on they run on separate sessions in the
threadpool and are awaited together; otherwise they share one session
and run back to back.
"""

import asyncio
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from reviews_api.core.exceptions import QueryError
from reviews_api.core.logging import get_logger
from reviews_api.db.session import SessionFactory
from reviews_api.repositories.software_review_repository import SoftwareReviewRepository
from reviews_api.services.query_builder import ReviewQuery, ReviewQueryBuilder

logger = get_logger(__name__)

LIST_FAILED_MESSAGE = "Failed to fetch software reviews."


class SoftwareReviewService:
    """Serve ``GET /software`` pages."""

    def __init__(self, session_factory: SessionFactory, concurrent_reads: bool = True):
        self.session_factory = session_factory
        self.concurrent_reads = concurrent_reads

    def _fetch_page(self, query: ReviewQuery) -> List[Dict[str, Any]]:
        with self.session_factory() as db:
            reviews = SoftwareReviewRepository(db).find_page(query)
            return [review.to_document() for review in reviews]

    def _count(self, query: ReviewQuery) -> int:
        with self.session_factory() as db:
            return SoftwareReviewRepository(db).count_matching(query)

    def _fetch_sequential(self, query: ReviewQuery):
        with self.session_factory() as db:
            repository = SoftwareReviewRepository(db)
            docs = [review.to_document() for review in repository.find_page(query)]
            return docs, repository.count_matching(query)

    async def list_reviews(self, params: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        """
        Fetch one page of reviews plus the total matching count.

        Args:
            params: Raw query parameters (q, minRating, verified, year,
                sort, page, limit)

        Returns:
            ``{"docs", "total", "page", "limit"}``

        Raises:
            QueryError: If either read fails
        """
        query = ReviewQueryBuilder.from_params(params).build()

        try:
            if self.concurrent_reads:
                docs, total = await asyncio.gather(
                    run_in_threadpool(self._fetch_page, query),
                    run_in_threadpool(self._count, query),
                )
            else:
                docs, total = await run_in_threadpool(self._fetch_sequential, query)
        except SQLAlchemyError as e:
            logger.error(
                "software_reviews_fetch_failed",
                exception_type=type(e).__name__,
                error=str(e),
                page=query.page,
                limit=query.limit,
            )
            raise QueryError(LIST_FAILED_MESSAGE) from e

        return {"docs": docs, "total": total, "page": query.page, "limit": query.limit}
