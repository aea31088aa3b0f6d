"""
API Router - Main Entry Point
Aggregates every endpoint of the software reviews service
"""
from fastapi import APIRouter

from reviews_api.api.routes import analysis, analytics, catalog, imports, software
from reviews_api.schemas.common import ErrorResponse

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

router.include_router(software.router)
router.include_router(analytics.router)
router.include_router(imports.router)
router.include_router(catalog.router)
router.include_router(analysis.router)
