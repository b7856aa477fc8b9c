"""
Shared test fixtures.

Tests run against in-memory SQLite. The environment is pointed at SQLite
before any application module reads settings.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "console")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.estatehub.api import rate_limit
from src.estatehub.api.auth import create_access_token
from src.estatehub.api.dependencies import get_db
from src.estatehub.api.main import app
from src.estatehub.db.base import Base
from src.estatehub.db.models import AdminRole
from src.estatehub.db.repository import AdminRepository, PropertyRepository

ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite engine shared by every session in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db(engine):
    """Database session for seeding and inspecting data."""
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = Session()

    yield session

    session.close()


@pytest.fixture(scope="function")
def client(engine):
    """TestClient whose requests use the test engine."""
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    rate_limit.general_limiter.reset()
    rate_limit.auth_limiter.reset()
    yield
    rate_limit.general_limiter.reset()
    rate_limit.auth_limiter.reset()


@pytest.fixture
def admin(test_db):
    """Active admin account with a known password."""
    admin = AdminRepository().create_admin(
        test_db,
        username="ops",
        email="ops@estatehub.example",
        password=ADMIN_PASSWORD,
        role=AdminRole.SUPER_ADMIN,
    )
    test_db.commit()
    return admin


@pytest.fixture
def auth_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin)}"}


@pytest.fixture
def make_property(test_db):
    """
    Factory creating committed listings.

    Listings get distinct created_at values in creation order unless one
    is passed explicitly.
    """
    repo = PropertyRepository()
    base_time = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "title": f"Listing {counter['n']}",
            "property_type": "apartment",
            "bhk_type": "2BHK",
            "price": 7500000,
            "area": 1000,
            "location": "Andheri West",
            "city": "Mumbai",
            "state": "Maharashtra",
            "amenities": [],
            "created_at": base_time + timedelta(hours=counter["n"]),
        }
        fields.update(overrides)
        listing = repo.create(test_db, **fields)
        test_db.commit()
        return listing

    return _make


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
