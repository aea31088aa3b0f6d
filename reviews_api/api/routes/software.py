from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from reviews_api.api import deps
from reviews_api.schemas.common import PaginatedDocs
from reviews_api.services.software_review_service import SoftwareReviewService

router = APIRouter(tags=["Software Reviews"])


@router.get("/software", response_model=PaginatedDocs)
async def list_software_reviews(
    q: Optional[str] = Query(None, description="Case-insensitive text in title or text"),
    min_rating: Optional[str] = Query(None, alias="minRating"),
    verified: Optional[str] = Query(None, description='Only "true" filters'),
    year: Optional[str] = Query(None, description="UTC calendar year of the review"),
    sort: Optional[str] = Query(None, description="rating_desc, rating_asc, date_desc or date_asc"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: SoftwareReviewService = Depends(deps.get_software_review_service),
) -> Dict[str, Any]:
    """
    One page of software reviews with the total matching count.

    Numeric parameters are taken as raw strings; malformed values are
    ignored rather than rejected.
    """
    return await service.list_reviews(
        {
            "q": q,
            "minRating": min_rating,
            "verified": verified,
            "year": year,
            "sort": sort,
            "page": page,
            "limit": limit,
        }
    )
