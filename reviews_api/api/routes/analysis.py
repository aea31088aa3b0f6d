from typing import Any, Dict

from fastapi import APIRouter, Depends

from reviews_api.api import deps
from reviews_api.services.critical_review_service import CriticalReviewService

router = APIRouter(prefix="/analysis", tags=["Analysis"])


@router.get("/critical-reviews")
def critical_reviews(
    service: CriticalReviewService = Depends(deps.get_critical_review_service),
) -> Dict[str, Any]:
    """Reviews whose comment reads as a qualified complaint, with names resolved."""
    return service.find_critical_reviews()
