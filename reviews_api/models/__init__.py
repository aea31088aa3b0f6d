"""
Record models.

Importing this package registers every table on ``Base.metadata``.
"""

from reviews_api.models.catalog import Product, Review, User
from reviews_api.models.software_review import SoftwareReview

__all__ = ["SoftwareReview", "User", "Product", "Review"]
