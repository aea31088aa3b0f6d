"""
Registry of the record kinds addressable by name.

``/upload-csv/{kind}`` and ``/clear/{kind}`` resolve their path segment
here; each kind ties a model to its create schema and repository.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Type

from sqlalchemy.orm import Session

from reviews_api.core.constants import (
    KIND_PRODUCTS,
    KIND_REVIEWS,
    KIND_SOFTWARE,
    KIND_USERS,
)
from reviews_api.core.exceptions import UnknownRecordKindError
from reviews_api.db.base import Base
from reviews_api.models import Product, Review, SoftwareReview, User
from reviews_api.repositories.base_repository import BaseRepository
from reviews_api.repositories.catalog_repository import (
    ProductRepository,
    ReviewRepository,
    UserRepository,
)
from reviews_api.repositories.software_review_repository import SoftwareReviewRepository
from reviews_api.schemas.common import BaseSchema
from reviews_api.schemas.records import (
    ProductCreate,
    ReviewCreate,
    SoftwareReviewCreate,
    UserCreate,
)


@dataclass(frozen=True)
class RecordKind:
    name: str
    model: Type[Base]
    schema: Type[BaseSchema]
    repository_class: Callable[[Session], BaseRepository]

    def repository(self, db: Session) -> BaseRepository:
        return self.repository_class(db)

    def build(self, payload: BaseSchema) -> Base:
        """Turn a validated payload into an unsaved model instance."""
        return self.model(**payload.to_model_kwargs())


RECORD_KINDS: Dict[str, RecordKind] = {
    KIND_USERS: RecordKind(KIND_USERS, User, UserCreate, UserRepository),
    KIND_PRODUCTS: RecordKind(KIND_PRODUCTS, Product, ProductCreate, ProductRepository),
    KIND_REVIEWS: RecordKind(KIND_REVIEWS, Review, ReviewCreate, ReviewRepository),
    KIND_SOFTWARE: RecordKind(
        KIND_SOFTWARE, SoftwareReview, SoftwareReviewCreate, SoftwareReviewRepository
    ),
}


def get_record_kind(name: str) -> RecordKind:
    """
    Look up a record kind by its path name.

    Raises:
        UnknownRecordKindError: If no kind has that name
    """
    try:
        return RECORD_KINDS[name]
    except KeyError:
        raise UnknownRecordKindError(name) from None
