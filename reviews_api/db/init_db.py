"""Create tables for every registered model."""
from sqlalchemy.engine import Engine

from reviews_api.core.logging import get_logger
from reviews_api.db.base import Base

logger = get_logger(__name__)


def init_db(engine: Engine) -> None:
    # Registers every model on Base.metadata
    import reviews_api.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("database_initialized", tables=sorted(Base.metadata.tables))
