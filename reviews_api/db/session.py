"""Database session management."""
from functools import lru_cache
from typing import Callable, Generator

from fastapi import Depends
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from reviews_api.config.settings import settings

SessionFactory = Callable[[], Session]


def build_engine(database_url: str, **overrides) -> Engine:
    """
    Create an engine with pooling options that suit the backend.

    SQLite does not take the pool sizing arguments, and needs
    ``check_same_thread`` off because FastAPI runs sync handlers in a
    threadpool.
    """
    options = {"pool_pre_ping": True, "echo": settings.DB_ECHO}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_OVERFLOW,
            pool_recycle=3600,
            connect_args=settings.DB_CONNECT_ARGS,
        )
    options.update(overrides)
    engine = create_engine(database_url, **options)
    if is_sqlite:
        _register_unicode_lower(engine)
    return engine


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_unicode_lower(engine: Engine) -> None:
    """
    Replace SQLite's ASCII-only ``lower()`` with Python's case folding.

    Case-insensitive filters compare ``lower(column)`` against a needle
    lowered in Python, so both sides must fold the same way.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


@lru_cache()
def get_engine() -> Engine:
    """Process-wide engine, created on first use."""
    return build_engine(settings.get_database_url())


@lru_cache()
def get_session_factory() -> sessionmaker:
    """
    Provide a session factory for services that open their own sessions.

    Overridden in tests to point at a throwaway database.
    """
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db(
    session_factory: SessionFactory = Depends(get_session_factory),
) -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
