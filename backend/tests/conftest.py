"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time: point them at a throwaway database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base, Client, Trainer, User
from rest_api.seed import seed_demo_data
from shared.infrastructure.db import get_db
from shared.security.auth import sign_id_token


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def _override_get_db(db_session):
    def override_get_db():
        yield db_session

    return override_get_db


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    app.dependency_overrides[get_db] = _override_get_db(db_session)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def token():
    """Bearer token for the demo admin account."""
    return sign_id_token("demo-admin", email="admin@gym.example.com", email_verified=True)


@pytest.fixture
def auth_headers(token):
    """Authentication headers for API calls."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_data(db_session):
    """
    Load the demo gym and return handles to its rows.

    users: admin, sarah, mike, john, emma, jane
    trainers: sarah, mike
    clients: john, emma, jane (jane has no trainer)
    """
    seed_demo_data(db_session)

    users = {
        u.email.split("@")[0].split(".")[0]: u
        for u in db_session.scalars(select(User))
    }
    trainers = {t.user.name.split()[0].lower(): t for t in db_session.scalars(select(Trainer))}
    clients = {c.user.name.split()[0].lower(): c for c in db_session.scalars(select(Client))}
    return SimpleNamespace(users=users, trainers=trainers, clients=clients)


@pytest.fixture
def seed_user(db_session):
    """Create a single client-role user without a profile."""
    user = User(
        name="Test Person",
        email="test.person@gym.example.com",
        role="CLIENT",
        firebase_uid="uid-test-person",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
