"""
Exception handlers that turn application errors into JSON bodies.

Every failure reaches the client as ``{"error": ..., "details"?: ...}``
with a 400 or 500 status; nothing propagates far enough to take the
process down.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from reviews_api.core.exceptions import BaseAppException
from reviews_api.core.logging import get_logger
from reviews_api.core.middleware import get_request_id

logger = get_logger(__name__)


async def handle_application_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    """Render custom application exceptions"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "application_exception",
        error_code=exc.error_code.value,
        error=exc.message,
        details=exc.details,
        path=request.url.path,
        method=request.method,
        request_id=get_request_id(request),
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed requests with the same body as every other error"""
    problems = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    ]
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        method=request.method,
        errors=problems,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(problems) or "Invalid request."},
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Render store failures that escaped a service"""
    logger.error(
        "database_exception",
        exception_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Database operation failed."},
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Render anything else as a generic 500"""
    logger.critical(
        "unexpected_exception",
        exception_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)


__all__ = ["register_exception_handlers"]
