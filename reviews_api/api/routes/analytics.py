from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from reviews_api.api import deps
from reviews_api.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/agg", tags=["Aggregations"])


@router.get("/stats")
def summary_stats(service: AnalyticsService = Depends(deps.get_analytics_service)) -> Dict[str, Any]:
    """Average rating, total and verified percentage; ``{}`` when empty."""
    return service.summary_stats()


@router.get("/ratings-distribution")
def ratings_distribution(
    service: AnalyticsService = Depends(deps.get_analytics_service),
) -> List[Dict[str, Any]]:
    return service.ratings_distribution()


@router.get("/reviews-per-year")
def reviews_per_year(
    service: AnalyticsService = Depends(deps.get_analytics_service),
) -> List[Dict[str, Any]]:
    return service.reviews_per_year()
