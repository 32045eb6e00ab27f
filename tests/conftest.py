"""
Pytest configuration and fixtures for chargemap tests.

Provides test database isolation and common test utilities.
"""
import os
import pathlib
import sys

# Settings are read once at import; point them at a throwaway database first
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chargemap.db import Base, enable_sqlite_foreign_keys  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

# One shared connection so every session sees the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {},
    poolclass=StaticPool if "sqlite" in TEST_DATABASE_URL else None,
    echo=False,
)
enable_sqlite_foreign_keys(test_engine)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create the schema once per test session and drop it afterwards."""
    from chargemap import models  # noqa: F401

    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)

    yield

    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def db():
    """
    Provide a clean database session for each test.

    Service commits land inside an outer transaction that is rolled back
    after the test, so no data leaks between tests.
    """
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture(scope="function")
def client(setup_test_db, db):
    """
    Provide a FastAPI TestClient whose get_db dependency yields the test session.
    """
    from fastapi.testclient import TestClient
    from chargemap.main import app
    from chargemap.db import get_db

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    try:
        # raise_server_exceptions=False so unhandled errors come back as 500s
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_company(db):
    """Factory: create a company through the service layer."""
    from chargemap.services.company_service import CompanyService

    def _make(name="Acme Charging", parent=None):
        parent_id = parent.id if parent is not None else None
        return CompanyService.create_company(db, name=name, parent_company_id=parent_id)

    return _make


@pytest.fixture
def make_station(db):
    """Factory: create a station through the service layer."""
    from chargemap.services.station_service import StationService

    def _make(company, latitude=0.0, longitude=0.0, name="Station"):
        return StationService.create_station(
            db,
            name=name,
            latitude=latitude,
            longitude=longitude,
            company_id=company.id,
        )

    return _make
