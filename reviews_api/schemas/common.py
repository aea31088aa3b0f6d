# reviews_api/schemas/common.py
"""
Base schema classes and pagination schemas shared by every record kind.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

__all__ = [
    "BaseSchema",
    "FlexibleSchema",
    "PaginationParams",
    "PaginatedDocs",
    "MessageResponse",
    "ImportResponse",
    "ErrorResponse",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Unknown keys are ignored, which is what strict record kinds want.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=False,
        validate_assignment=True,
        # CSV cells and JSON bodies both feed these schemas; ids may arrive as numbers
        coerce_numbers_to_str=True,
    )


class FlexibleSchema(BaseSchema):
    """
    Schema for record kinds that accept arbitrary extra fields.

    Extra keys land in ``model_extra`` and are persisted as the record's
    ``extras`` side-map.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(default=None, alias="_id", max_length=64)

    @property
    def extras(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class PaginationParams(BaseSchema):
    """Normalized pagination parameters."""

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(default=50, ge=1, description="Items per page")

    @computed_field  # type: ignore[misc]
    @property
    def skip(self) -> int:
        """Calculate offset for database queries."""
        return (self.page - 1) * self.limit


class PaginatedDocs(BaseSchema):
    """Page of documents returned by list endpoints."""

    docs: List[Dict[str, Any]]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)


class MessageResponse(BaseSchema):
    message: str


class ImportResponse(BaseSchema):
    message: str
    inserted: int = Field(..., ge=0)


class ErrorResponse(BaseSchema):
    error: str
    details: Optional[str] = None
