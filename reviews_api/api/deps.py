"""
Service providers for route functions.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from reviews_api.api import deps

    router = APIRouter()

    @router.get("/agg/stats")
    def stats(service = Depends(deps.get_analytics_service)):
        return service.summary_stats()
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from reviews_api.config.settings import Settings, get_settings
from reviews_api.db.session import SessionFactory, get_db, get_session_factory
from reviews_api.services.analytics_service import AnalyticsService
from reviews_api.services.catalog_service import CatalogService
from reviews_api.services.critical_review_service import CriticalReviewService
from reviews_api.services.import_service import CsvImportService
from reviews_api.services.software_review_service import SoftwareReviewService


def get_software_review_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    config: Settings = Depends(get_settings),
) -> SoftwareReviewService:
    return SoftwareReviewService(session_factory, concurrent_reads=config.CONCURRENT_READS)


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


def get_import_service(
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
) -> CsvImportService:
    return CsvImportService(db, max_upload_size=config.MAX_UPLOAD_SIZE)


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_critical_review_service(db: Session = Depends(get_db)) -> CriticalReviewService:
    return CriticalReviewService(db)
