import os
from pathlib import Path

# Must be set before reviews_api reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from reviews_api.config.settings import get_settings  # noqa: E402
from reviews_api.db.base import Base  # noqa: E402
from reviews_api.db.session import build_engine, get_session_factory  # noqa: E402
from reviews_api.main import app  # noqa: E402
from reviews_api.models import Product, Review, SoftwareReview, User  # noqa: E402


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)
        if "/unit/" in str(test_path):
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: pure function and class tests")
    config.addinivalue_line("markers", "integration: tests that drive the HTTP API")


@pytest.fixture()
def engine(tmp_path):
    """File-backed SQLite so concurrent reads see the same data."""
    engine = build_engine(f"sqlite:///{tmp_path / 'reviews.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture()
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture()
def client(session_factory):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def sequential_client(client):
    """Client whose list endpoint runs its two reads back to back."""
    settings = get_settings().model_copy(update={"CONCURRENT_READS": False})
    app.dependency_overrides[get_settings] = lambda: settings
    return client


# ---------------------------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------------------------
def add_software_reviews(db, *rows):
    """Insert software reviews in order; each row is a dict of column values."""
    reviews = [SoftwareReview(**row) for row in rows]
    db.add_all(reviews)
    db.commit()
    return reviews


def add_catalog(db, users=(), products=(), reviews=()):
    for kwargs in users:
        db.add(User(**kwargs))
    for kwargs in products:
        db.add(Product(**kwargs))
    for kwargs in reviews:
        db.add(Review(**kwargs))
    db.commit()


@pytest.fixture()
def seed_software(db):
    def _seed(*rows):
        return add_software_reviews(db, *rows)

    return _seed


@pytest.fixture()
def seed_catalog(db):
    def _seed(users=(), products=(), reviews=()):
        add_catalog(db, users=users, products=products, reviews=reviews)

    return _seed
