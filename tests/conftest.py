"""
Test configuration and fixtures.
"""
import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_db
from main import app
from models.accommodation import (
    Accommodation, AccommodationAmenity, AccommodationImage, PriceTier,
)
from models.gate import Gate
from models.sighting import Sighting
from models.users import Role, User
from utils.hashing import get_password_hash
from utils.tokenJWT import issue_token_for

# In-memory SQLite shared by every session through a single connection
TEST_DATABASE_URL = "sqlite://"

TestingSessionLocal = None


@pytest.fixture(scope="function", autouse=True)
def setup_database():
    """
    Set up a fresh test database before each test.
    This runs automatically for every test function.
    """
    global TestingSessionLocal

    test_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    yield

    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    # No context manager: the lifespan (init_db + seeding) stays off in tests
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(email="user@example.com", role=Role.VISITOR, password="secret123",
              first_name="Test", last_name="User"):
        user = User(
            email=email,
            password_hash=get_password_hash(password),
            role=role.value,
            first_name=first_name,
            last_name=last_name,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {issue_token_for(user)}"}


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@example.com", Role.ADMIN, first_name="Park", last_name="Admin")


@pytest.fixture
def ranger_user(make_user):
    return make_user("ranger@example.com", Role.RANGER, first_name="John", last_name="Ranger")


@pytest.fixture
def visitor_user(make_user):
    return make_user("visitor@example.com", Role.VISITOR, first_name="Sarah", last_name="Visitor")


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def ranger_headers(ranger_user):
    return bearer(ranger_user)


@pytest.fixture
def visitor_headers(visitor_user):
    return bearer(visitor_user)


@pytest.fixture
def make_gate(db):
    def _make(name="Malelane Gate", location="Southern Kruger", description=None):
        gate = Gate(gate_name=name, location=location, description=description)
        db.add(gate)
        db.commit()
        db.refresh(gate)
        return gate
    return _make


@pytest.fixture
def make_sighting(db):
    """Insert a sighting; age is how long ago it was reported."""
    def _make(animal="lion", gate=None, probability="high", confidence="confirmed",
              age=timedelta(hours=1), reporter=None, notes=None):
        sighting = Sighting(
            gate_id=gate.id if gate is not None else None,
            animal_type=animal,
            probability=probability,
            confidence=confidence,
            notes=notes,
            reported_by=reporter.id if reporter is not None else None,
            created_at=datetime.utcnow() - age,
        )
        db.add(sighting)
        db.commit()
        db.refresh(sighting)
        return sighting
    return _make


@pytest.fixture
def make_accommodation(db):
    def _make(name="Test Lodge", type="Lodge", star_rating=3, guest_rating=None,
              price="$$", amenities=(), proximity_to_gates=None, images=()):
        tier = PriceTier.from_symbol(price)
        acc = Accommodation(
            name=name,
            type=type,
            star_rating=star_rating,
            guest_rating=guest_rating,
            review_count=0,
            price_tier=tier.value if tier else None,
            proximity_to_gates=proximity_to_gates,
        )
        acc.amenities = [AccommodationAmenity(name=a) for a in amenities]
        acc.images = [AccommodationImage(image_url=url, is_primary=(i == 0)) for i, url in enumerate(images)]
        db.add(acc)
        db.commit()
        db.refresh(acc)
        return acc
    return _make


@pytest.fixture
def auth_headers():
    return bearer
