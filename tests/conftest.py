"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- catalog_definitions: The default holiday catalog from data/holidays.json
- test_session_factory: sessionmaker bound to an in-memory SQLite database
- test_db: Session on that database, seeded with the default catalog
- test_client: FastAPI TestClient reading the catalog from test_db
- holiday_service: HolidayService over the default catalog, no database
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep the app's startup database and log files out of the working tree
_tmp_dir = tempfile.mkdtemp(prefix="holiday_api_tests_")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_tmp_dir}/holidays.db")
os.environ.setdefault("LOG_DIR", os.path.join(_tmp_dir, "logs"))
os.environ.setdefault("HOLIDAY_CATALOG_PATH", str(project_root / "data" / "holidays.json"))

# ruff: noqa: E402
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from holiday_api.core.catalog import DatabaseCatalogProvider, StaticCatalogProvider
from holiday_api.core.service import HolidayService
from holiday_api.core.storage import load_holiday_definitions
from holiday_api.database.database import Base, get_db, seed_catalog
from holiday_api.main import app
from holiday_api.routes.holidays import get_catalog_provider

CATALOG_FILE = project_root / "data" / "holidays.json"


@pytest.fixture(scope="session")
def catalog_definitions():
    """The default holiday catalog, loaded once per test session."""
    return load_holiday_definitions(CATALOG_FILE)


@pytest.fixture(scope="function")
def test_session_factory():
    """
    Create an in-memory SQLite database for testing.

    StaticPool keeps a single connection so every session (including the
    ones opened by the catalog provider) sees the same database.

    Yields:
        sessionmaker bound to the test database
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_session_factory, catalog_definitions):
    """
    Database session with the default catalog seeded.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    db = test_session_factory()
    seed_catalog(db, catalog_definitions)

    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def test_client(test_db, test_session_factory):
    """
    Create FastAPI TestClient with the test database.

    Overrides both the session dependency and the catalog provider so
    requests read holidays from the in-memory database without caching.

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_provider] = lambda: DatabaseCatalogProvider(test_session_factory)

    with TestClient(app) as client:
        yield client

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def holiday_service(catalog_definitions):
    """HolidayService over the default catalog held in memory."""
    return HolidayService(StaticCatalogProvider(catalog_definitions))
