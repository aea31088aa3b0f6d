from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reviews_api.api.router import router as api_router
from reviews_api.config.settings import settings
from reviews_api.core.error_handling import register_exception_handlers
from reviews_api.core.logging import setup_logging
from reviews_api.core.middleware import register_middlewares
from reviews_api.db.init_db import init_db
from reviews_api.db.session import get_engine


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version and debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the API router at the root, where the dashboard expects it.
    """
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    if settings.CORS_ORIGINS and settings.CORS_ORIGINS != ["*"]:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Browsers reject credentials with a wildcard origin
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Register shared core middlewares (request ID, timing)
    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok"}

    # Create tables outside production; production schemas are managed externally
    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            init_db(get_engine())

    return app


app = create_app()
