"""
Base service class providing common functionality for all services.
"""

from typing import Any

from sqlalchemy.orm import Session

from reviews_api.core.exceptions import QueryError
from reviews_api.core.logging import get_logger


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Store failures converted to ``QueryError``
    """

    def __init__(self, db_session: Session):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    def _query_failed(self, exception: Exception, operation: str, message: str, **context: Any) -> QueryError:
        """
        Log a store failure and build the error the client will see.

        The store's own message stays in the log; the client gets only
        ``message``.
        """
        self._logger.error(
            "query_failed",
            operation=operation,
            exception_type=type(exception).__name__,
            error=str(exception),
            **context,
        )
        return QueryError(message)
