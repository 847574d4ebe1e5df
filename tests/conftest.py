# tests/conftest.py
"""Shared fixtures: a fresh in-memory SQLite database per test, users, and an API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa — registers every table on Base.metadata
from app.database import Base, get_db
from app.models.profile import Profile
from app.services import vehicle_service


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def make_profile(db, profile_id, role="user", full_name=None, badge_number=None):
    profile = Profile(id=profile_id, role=role, full_name=full_name or profile_id.title(),
                      badge_number=badge_number, created_at=datetime.utcnow())
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def admin(db):
    return make_profile(db, "admin-1", role="admin", full_name="Alex Admin")


@pytest.fixture
def user(db):
    return make_profile(db, "user-1", role="user", full_name="Uma User", badge_number="B-17")


@pytest.fixture
def vehicle(db, admin):
    return vehicle_service.create_vehicle(db, admin, unit_number="7", make="Ford", model="Transit", year=2021)


@pytest.fixture
def client(db):
    from app.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def as_user(profile_id):
    """Headers the auth gateway would forward for this user."""
    return {"X-User-Id": profile_id}
