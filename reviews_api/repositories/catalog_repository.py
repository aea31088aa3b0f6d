"""Repositories for users, products and comment reviews."""

from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from reviews_api.models.catalog import Product, Review, User
from reviews_api.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(User, db)


class ProductRepository(BaseRepository[Product]):
    def __init__(self, db: Session):
        super().__init__(Product, db)


class ReviewRepository(BaseRepository[Review]):
    def __init__(self, db: Session):
        super().__init__(Review, db)

    def find_by_comment_fragment(self, fragment: str) -> List[Review]:
        """
        Reviews whose comment contains ``fragment``, ignoring case.

        The fragment is matched literally. Reviews without a comment never
        match.
        """
        stmt = select(Review).where(
            func.lower(Review.comment).contains(fragment.lower(), autoescape=True)
        )
        return list(self.db.scalars(stmt))
