"""
Software review record, imported in bulk from the product review dumps.

The kind is strict: columns not listed here are dropped on import.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import BigInteger, Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reviews_api.db.base import Base, JSONType
from reviews_api.models.base import plain_number

__all__ = ["SoftwareReview"]


class SoftwareReview(Base):
    __tablename__ = "software_reviews"

    # Auto-increment key doubles as insertion order for the default sort
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    rating: Mapped[Optional[float]] = mapped_column(Float, index=True)
    title: Mapped[Optional[str]] = mapped_column(Text)
    text: Mapped[Optional[str]] = mapped_column(Text)
    images: Mapped[Optional[List[Any]]] = mapped_column(JSONType, default=list)

    # Soft references to products and users, never resolved here
    asin: Mapped[Optional[str]] = mapped_column(String(64))
    parent_asin: Mapped[Optional[str]] = mapped_column(String(64))
    user_id: Mapped[Optional[str]] = mapped_column(String(128))

    # Epoch milliseconds
    timestamp: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)
    helpful_vote: Mapped[Optional[int]] = mapped_column(Integer)
    verified_purchase: Mapped[Optional[bool]] = mapped_column(Boolean, index=True)

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "rating": plain_number(self.rating),
            "title": self.title,
            "text": self.text,
            "images": self.images if self.images is not None else [],
            "asin": self.asin,
            "parent_asin": self.parent_asin,
            "user_id": self.user_id,
            "timestamp": self.timestamp,
            "helpful_vote": self.helpful_vote,
            "verified_purchase": self.verified_purchase,
        }

    def __repr__(self) -> str:
        return f"<SoftwareReview(id={self.id}, rating={self.rating})>"
