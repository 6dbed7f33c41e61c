"""Root conftest: shared fixtures for service, store and API tests."""

import os

# Keep the app off a real PostgreSQL server during tests
os.environ["DATABASE_URL"] = "sqlite://"

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from catalog.db.base import Base  # noqa: E402
from catalog.db.models.product import Product  # noqa: E402, F401
from catalog.services.product_service import ProductService  # noqa: E402
from tests.fakes import FakeProductStore, FixedClock  # noqa: E402


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> FakeProductStore:
    return FakeProductStore()


@pytest.fixture
def service(store, clock) -> ProductService:
    return ProductService(store, clock=clock)


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(sqlite_engine):
    SessionTesting = sessionmaker(bind=sqlite_engine, autoflush=False)
    session = SessionTesting()
    try:
        yield session
    finally:
        session.close()
