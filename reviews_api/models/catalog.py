"""
Users, products and comment reviews.

All three kinds are flexible: anything outside the typed core is kept in
the ``extras`` side-map. Reviews point at users and products through soft
references that nothing enforces.
"""

from typing import Optional

from sqlalchemy import Boolean, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reviews_api.db.base import Base
from reviews_api.models.base import DocumentMixin

__all__ = ["User", "Product", "Review"]


class User(DocumentMixin, Base):
    __tablename__ = "users"
    __document_fields__ = (("name", "name"), ("email", "email"))

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))


class Product(DocumentMixin, Base):
    __tablename__ = "products"
    __document_fields__ = (
        ("name", "name"),
        ("category", "category"),
        ("price", "price"),
        ("inStock", "in_stock"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(255))
    price: Mapped[Optional[float]] = mapped_column(Float)
    in_stock: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Review(DocumentMixin, Base):
    __tablename__ = "reviews"
    __document_fields__ = (
        ("userId", "user_id"),
        ("productId", "product_id"),
        ("rating", "rating"),
        ("comment", "comment"),
    )

    user_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    product_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    rating: Mapped[Optional[float]] = mapped_column(Float)
    comment: Mapped[Optional[str]] = mapped_column(Text)
