# reviews_api/schemas/records.py
"""
Create schemas for every record kind.

These validate JSON bodies and CSV rows alike, so they accept the loose
string forms a CSV produces: empty cells read as absent, numeric and
boolean strings are coerced, and a bare image value is wrapped in a list.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from reviews_api.schemas.common import BaseSchema, FlexibleSchema

__all__ = [
    "SoftwareReviewCreate",
    "UserCreate",
    "ProductCreate",
    "ReviewCreate",
    "coerce_in_stock",
]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def coerce_in_stock(value: Any) -> bool:
    """Read a stock flag the way the product sheets write it."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "yes", "1")


class SoftwareReviewCreate(BaseSchema):
    """Strict kind: unknown columns are ignored."""

    rating: Optional[float] = None
    title: Optional[str] = None
    text: Optional[str] = None
    images: List[Any] = Field(default_factory=list)
    asin: Optional[str] = None
    parent_asin: Optional[str] = None
    user_id: Optional[str] = None
    timestamp: Optional[int] = None
    helpful_vote: Optional[int] = None
    verified_purchase: Optional[bool] = None

    @field_validator(
        "rating", "timestamp", "helpful_vote", "verified_purchase",
        mode="before",
    )
    @classmethod
    def blank_scalars(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("images", mode="before")
    @classmethod
    def wrap_images(cls, v: Any) -> List[Any]:
        v = _blank_to_none(v)
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return list(v)
        return [v]

    def to_model_kwargs(self) -> Dict[str, Any]:
        return self.model_dump()


class _FlexibleCreate(FlexibleSchema):
    def to_model_kwargs(self) -> Dict[str, Any]:
        core = set(type(self).model_fields) - {"id"}
        kwargs = self.model_dump(include=core)
        kwargs["extras"] = self.extras
        if self.id:
            kwargs["id"] = self.id
        return kwargs


class UserCreate(_FlexibleCreate):
    name: str = Field(..., min_length=1)
    email: Optional[str] = None


class ProductCreate(_FlexibleCreate):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    price: Optional[float] = None
    in_stock: bool = Field(default=True, alias="inStock")

    @field_validator("price", mode="before")
    @classmethod
    def blank_price(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("in_stock", mode="before")
    @classmethod
    def parse_in_stock(cls, v: Any) -> bool:
        return coerce_in_stock(v)


class ReviewCreate(_FlexibleCreate):
    user_id: Optional[str] = Field(default=None, alias="userId")
    product_id: Optional[str] = Field(default=None, alias="productId")
    rating: Optional[float] = None
    comment: Optional[str] = None

    @field_validator("user_id", "product_id", "rating", mode="before")
    @classmethod
    def blank_refs(cls, v: Any) -> Any:
        return _blank_to_none(v)
