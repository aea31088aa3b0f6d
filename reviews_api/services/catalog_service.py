"""
Users, products and comment reviews.

Reviews reference users and products through soft references that are
resolved on read: fetch the reviews, collect the referenced keys,
batch-fetch the referenced records and merge in memory.
"""

from typing import Any, Dict, List, Mapping

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from reviews_api.core.constants import KIND_USERS
from reviews_api.core.exceptions import (
    ValidationError,
    create_validation_error,
    field_errors_from_pydantic,
)
from reviews_api.models.catalog import Review
from reviews_api.repositories.catalog_repository import (
    ProductRepository,
    ReviewRepository,
    UserRepository,
)
from reviews_api.services.base_service import BaseService
from reviews_api.services.record_kinds import get_record_kind


class CatalogService(BaseService):
    """Create and list catalog records, with reviews joined on read."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.users = UserRepository(db_session)
        self.products = ProductRepository(db_session)
        self.reviews = ReviewRepository(db_session)

    # ==================== Create ====================

    def create(self, kind_name: str, body: Any) -> Dict[str, Any]:
        """
        Validate and insert one record.

        Args:
            kind_name: users, products or reviews
            body: Decoded JSON request body

        Returns:
            The stored document

        Raises:
            ValidationError: If the body is invalid or the ``_id`` is taken
            QueryError: If the insert fails for any other reason
        """
        kind = get_record_kind(kind_name)
        if not isinstance(body, Mapping):
            raise ValidationError("Request body must be a JSON object.")

        try:
            payload = kind.schema.model_validate(dict(body))
        except PydanticValidationError as e:
            raise create_validation_error(field_errors_from_pydantic(e)) from e

        repository = kind.repository(self.db)
        try:
            record = repository.create(kind.build(payload))
        except IntegrityError as e:
            self._logger.warning("record_conflict", kind=kind.name, error=str(e))
            raise ValidationError(
                f"A {kind.name} record with _id {payload.id!r} already exists."
            ) from e
        except SQLAlchemyError as e:
            raise self._query_failed(e, "create", f"Failed to create {kind.name} record.", kind=kind.name) from e

        self._logger.info("record_created", kind=kind.name, record_id=record.id)
        return record.to_document()

    # ==================== Read ====================

    def list_documents(self, kind_name: str) -> List[Dict[str, Any]]:
        """Every record of a plain kind (users or products) as documents."""
        repository = self.users if kind_name == KIND_USERS else self.products
        try:
            return [record.to_document() for record in repository.find_all()]
        except SQLAlchemyError as e:
            raise self._query_failed(e, "list", f"Failed to fetch {kind_name}.", kind=kind_name) from e

    def populate_reviews(self, reviews: List[Review]) -> List[Dict[str, Any]]:
        """
        Replace each review's ``userId``/``productId`` with the referenced
        document, or None when the reference does not resolve.
        """
        users = self._index(self.users.find_by_ids(r.user_id for r in reviews))
        products = self._index(self.products.find_by_ids(r.product_id for r in reviews))

        documents = []
        for review in reviews:
            document = review.to_document()
            user = users.get(review.user_id)
            product = products.get(review.product_id)
            document["userId"] = user.to_document() if user else None
            document["productId"] = product.to_document() if product else None
            documents.append(document)
        return documents

    def list_reviews(self) -> List[Dict[str, Any]]:
        """All reviews with their user and product joined in."""
        try:
            return self.populate_reviews(self.reviews.find_all())
        except SQLAlchemyError as e:
            raise self._query_failed(e, "list", "Failed to fetch reviews.", kind="reviews") from e

    def dump(self) -> Dict[str, List[Dict[str, Any]]]:
        """Everything the dashboard shows: users, products and joined reviews."""
        try:
            return {
                "users": [user.to_document() for user in self.users.find_all()],
                "products": [product.to_document() for product in self.products.find_all()],
                "reviews": self.populate_reviews(self.reviews.find_all()),
            }
        except SQLAlchemyError as e:
            raise self._query_failed(e, "dump", "Failed to fetch data.") from e

    @staticmethod
    def _index(records) -> Dict[str, Any]:
        return {record.id: record for record in records}


__all__ = ["CatalogService"]
