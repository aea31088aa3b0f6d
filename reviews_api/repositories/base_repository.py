"""
Base repository with the store operations every record kind supports.

Records are only ever inserted, listed and bulk-deleted, so the surface
is small. Store errors roll the session back and propagate as
``SQLAlchemyError``; services decide how to report them.
"""

from contextlib import contextmanager
from typing import Any, Generic, Iterable, List, Sequence, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reviews_api.core.logging import get_logger
from reviews_api.db.base import Base

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over a single model.

    Provides create, bulk create, list, keyed lookup and delete-all
    for all record kinds.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Transaction Management ====================

    @contextmanager
    def transaction(self):
        """
        Commit on success, roll back and re-raise on store errors.

        Usage:
            with repository.transaction():
                repository.db.add(entity)
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "transaction_rolled_back",
                model=self.model.__name__,
                error=str(e),
            )
            raise

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """Insert one entity and return it refreshed from the store."""
        with self.transaction():
            self.db.add(entity)
        self.db.refresh(entity)
        return entity

    def create_many(self, entities: Sequence[ModelType]) -> int:
        """
        Insert every entity in one transaction.

        Returns:
            Number of inserted entities
        """
        if not entities:
            return 0
        with self.transaction():
            self.db.add_all(entities)
        return len(entities)

    # ==================== Read Operations ====================

    def find_all(self) -> List[ModelType]:
        return list(self.db.scalars(select(self.model)))

    def find_by_ids(self, ids: Iterable[Any]) -> List[ModelType]:
        """Batch lookup by primary key; unknown keys are skipped."""
        keys = {key for key in ids if key is not None}
        if not keys:
            return []
        stmt = select(self.model).where(self.model.id.in_(keys))
        return list(self.db.scalars(stmt))

    # ==================== Delete Operations ====================

    def delete_all(self) -> int:
        """
        Delete every record of the model.

        Returns:
            Number of deleted rows
        """
        with self.transaction():
            result = self.db.execute(delete(self.model))
        return result.rowcount or 0
