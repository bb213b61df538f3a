"""
Pytest configuration and fixtures for College Events API tests.

Every test function gets its own in-memory SQLite database and upload
directory, so tests never share state.
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

# Set test environment variables BEFORE importing modules that use settings
# These can be overridden by actual environment variables
_test_env_defaults = {
    "DATABASE_URL": "sqlite://",
    "JWT_SECRET": "test-secret-key-not-for-production",
    "JWT_ALGORITHM": "HS256",
    "TOKEN_EXPIRE_HOURS": "24",
    "UPLOAD_DIR": tempfile.mkdtemp(prefix="college-events-uploads-"),
    "DEBUG": "false",
}

# Set defaults only if not already set
for key, value in _test_env_defaults.items():
    if key not in os.environ:
        os.environ[key] = value

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from college_events.config import Settings, get_settings
from college_events.database import Database, get_db
from college_events.main import app


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Per-test upload directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def test_settings(upload_dir: Path) -> Settings:
    """Settings for a single test, pointing uploads at a temp directory."""
    return Settings(
        database_url="sqlite://",
        jwt_secret=os.environ["JWT_SECRET"],
        upload_dir=str(upload_dir),
    )


@pytest.fixture
def database() -> Generator[Database, Any, None]:
    """A fresh in-memory database with all tables created."""
    db = Database("sqlite://")
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, Any, None]:
    """Provide a database session bound to the test database."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session: Session, test_settings: Settings) -> Generator[TestClient, Any, None]:
    """
    Provide a FastAPI test client with overridden dependencies.

    The database session and settings are overridden to use test versions.
    """

    def override_get_db() -> Generator[Session, Any, None]:
        yield db_session

    def override_get_settings() -> Settings:
        return test_settings

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = override_get_settings

    with TestClient(app) as test_client:
        yield test_client

    # Clear overrides after test
    app.dependency_overrides.clear()


# --- Test Data Factories ---


@pytest.fixture
def user_data() -> dict[str, str]:
    """Provide default user registration data."""
    return {
        "name": "Ada Student",
        "email": "ada@college.edu",
        "password": "securepassword123",
    }


@pytest.fixture
def create_user(client: TestClient, user_data: dict[str, str]):
    """
    Factory fixture to register a user.

    Returns a function that registers users with optional custom data and
    returns the registration response plus the plain password and auth
    headers.
    """

    def _create_user(
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> dict[str, Any]:
        data = {
            "name": name or user_data["name"],
            "email": email or user_data["email"],
            "password": password or user_data["password"],
        }
        response = client.post("/api/auth/register", json=data)
        assert response.status_code == 201
        body = response.json()
        return {
            **body,
            "password": data["password"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _create_user


@pytest.fixture
def authenticated_user(create_user) -> dict[str, Any]:
    """The default registered user, with token."""
    return create_user()


@pytest.fixture
def auth_headers(authenticated_user: dict[str, Any]) -> dict[str, str]:
    """Provide authorization headers for authenticated requests."""
    return authenticated_user["headers"]


@pytest.fixture
def other_user_headers(create_user) -> dict[str, str]:
    """Authorization headers for a second, unrelated user."""
    return create_user(name="Bob Other", email="bob@college.edu")["headers"]


@pytest.fixture
def event_data() -> dict[str, str]:
    """Provide default event form data."""
    return {
        "title": "Robotics Club Kickoff",
        "description": "Meet the team and see last year's robots.",
        "date": "2025-09-15T18:00:00Z",
        "location": "Engineering Hall 101",
        "type": "Workshop",
    }


@pytest.fixture
def create_event(client: TestClient, auth_headers: dict[str, str], event_data: dict[str, str]):
    """
    Factory fixture to create an event.

    Defaults to the authenticated user; pass ``headers`` to create as
    someone else.
    """

    def _create_event(
        headers: dict[str, str] | None = None,
        **overrides: str,
    ) -> dict[str, Any]:
        data = {**event_data, **overrides}
        response = client.post(
            "/api/events",
            data=data,
            headers=headers or auth_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create_event


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny PNG payload (content is never decoded)."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
