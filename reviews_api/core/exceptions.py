"""
Custom Exceptions for the Software Reviews Application

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_RECORD_KIND = "UNKNOWN_RECORD_KIND"

    # Import errors
    IMPORT_FAILED = "IMPORT_FAILED"
    MISSING_FILE = "MISSING_FILE"

    # Query errors
    QUERY_FAILED = "QUERY_FAILED"
    DATABASE_ERROR = "DATABASE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Rendered to clients as ``{"error": message, "details": details}``,
    with ``details`` omitted when there is nothing to add.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[str] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the JSON error body"""
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(BaseAppException):
    """Exception raised when a create payload or request argument is invalid"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400
    ):
        self.field_errors = field_errors or {}
        super().__init__(message, error_code, None, status_code)


class UnknownRecordKindError(ValidationError):
    """Exception raised when a path names a record kind that does not exist"""

    def __init__(self, kind: str):
        super().__init__(
            f"Unknown data type: {kind}",
            error_code=ErrorCode.UNKNOWN_RECORD_KIND,
        )
        self.kind = kind


class DataImportError(BaseAppException):
    """Exception raised when a CSV upload is missing, unreadable or rejected"""

    def __init__(
        self,
        message: str = "Import failed.",
        details: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.IMPORT_FAILED,
        status_code: int = 500
    ):
        super().__init__(message, error_code, details, status_code)


class MissingFileError(DataImportError):
    """Exception raised when an upload request carries no file"""

    def __init__(self, message: str = "No file uploaded."):
        super().__init__(message, None, ErrorCode.MISSING_FILE, 400)


class QueryError(BaseAppException):
    """Exception raised when a query or aggregation fails in the store"""

    def __init__(
        self,
        message: str = "Query failed.",
        error_code: ErrorCode = ErrorCode.QUERY_FAILED,
        status_code: int = 500
    ):
        super().__init__(message, error_code, None, status_code)


# ========================================
# Utility Functions
# ========================================

def field_errors_from_pydantic(exc: Any) -> Dict[str, List[str]]:
    """Group a pydantic ValidationError's messages by dotted field path"""
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()))
        field_errors.setdefault(field, []).append(error.get("msg", "invalid value"))
    return field_errors


def create_validation_error(field_errors: Dict[str, List[str]]) -> ValidationError:
    """Create a validation error with field-specific errors"""
    parts = [
        f"{field}: {', '.join(errors)}" if field else ', '.join(errors)
        for field, errors in field_errors.items()
    ]
    message = "; ".join(parts) or "Validation failed"
    return ValidationError(message, field_errors)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'UnknownRecordKindError',
    'DataImportError',
    'MissingFileError',
    'QueryError',
    'field_errors_from_pydantic',
    'create_validation_error',
]
