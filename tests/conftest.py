"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from airdrops_hunter import models  # noqa: F401
from airdrops_hunter.api.dependencies import get_storage
from airdrops_hunter.database import Base
from airdrops_hunter.main import app
from airdrops_hunter.services.auth import create_user
from airdrops_hunter.services.db_storage import DatabaseStorage
from airdrops_hunter.services.storage import MemoryStorage

ADMIN_PASSWORD = "admin-pass-123"  # noqa: S105

# PostgreSQL when TEST_DATABASE_URL is set, SQLite otherwise
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function")
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    if engine.dialect.name == "sqlite":
        session.execute(text("DELETE FROM sqlite_sequence"))
    session.commit()
    session.close()


@pytest.fixture
def memory_storage():
    """Empty in-memory store."""
    return MemoryStorage()


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Run the test against both storage backends."""
    if request.param == "memory":
        return MemoryStorage()
    return DatabaseStorage(request.getfixturevalue("db"))


@pytest.fixture(scope="function")
def client(memory_storage):
    """Create a test client backed by a fresh in-memory store."""
    app.dependency_overrides[get_storage] = lambda: memory_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(memory_storage):
    """Admin account in the test client's store."""
    return create_user(
        memory_storage, "siteadmin", "admin@example.com", ADMIN_PASSWORD, is_admin=True
    )


@pytest.fixture
def admin_client(client, admin_user):
    """Test client with an admin session cookie."""
    response = client.post(
        "/api/users/login",
        json={"username": admin_user.username, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def airdrop_payload():
    """Valid airdrop create payload."""
    return {
        "title": "MoonToken Airdrop",
        "projectName": "MoonToken",
        "description": "Earn up to 500 MOON tokens by joining the community.",
        "requirements": "Join Telegram",
        "category": "DeFi",
        "estimatedValue": "$50-$200",
        "status": "Active",
        "participants": 10,
        "logoUrl": "https://example.com/logo.png",
    }


@pytest.fixture
def blog_post_payload():
    """Valid blog post create payload."""
    return {
        "title": "Airdrop Security Tips",
        "content": "Protect yourself from scams while hunting airdrops.",
        "category": "Security",
        "tags": "security,scams",
    }
