"""Pytest configuration and global fixtures for Taskboard tests.

This file provides test fixtures that are automatically available to all tests.
"""

import pytest
from fastapi.testclient import TestClient

from taskboard.api.server import create_app
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c2_auth_service.auth_service import AuthService
from taskboard.c2_credential_store.credential_store import CredentialStore
from taskboard.c2_task_service.task_service import TaskService
from taskboard.c2_task_store.task_store import TaskStore
from taskboard.core.config import AuthConfig, ServerConfig, Settings


@pytest.fixture
def test_settings():
    """Settings that do not depend on environment variables or .env files.

    Returns:
        Settings with a fixed signing secret and an in-memory database URL
    """
    return Settings(
        auth=AuthConfig(secret_key="test-secret-key"),
        server=ServerConfig(),
        log_level="ERROR",
    )


@pytest.fixture
def db_manager():
    """Fresh in-memory database with all tables created."""
    manager = DatabaseManager("sqlite:///:memory:")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def credential_store(db_manager):
    return CredentialStore(db_manager)


@pytest.fixture
def task_store(db_manager):
    return TaskStore(db_manager)


@pytest.fixture
def auth_service(credential_store, test_settings):
    return AuthService(credential_store, test_settings.auth)


@pytest.fixture
def task_service(task_store, credential_store):
    return TaskService(task_store, credential_store, enforce_ownership=True)


@pytest.fixture
def alice(auth_service):
    """A registered user as {"user": {...}, "token": str}."""
    return auth_service.register("Alice", "alice@example.com", "alice-password")


@pytest.fixture
def bob(auth_service):
    return auth_service.register("Bob", "bob@example.com", "bob-password")


@pytest.fixture
def app(test_settings, db_manager):
    return create_app(test_settings, db_manager)


@pytest.fixture
def test_client(app):
    """TestClient with the app lifespan running (tables opened, db closed afterwards)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """Register through the API; the helper returns (user, auth headers)."""

    def _register(name, email, password="secret123"):
        response = test_client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def api_alice(register_user):
    return register_user("Alice", "alice@example.com")


@pytest.fixture
def api_bob(register_user):
    return register_user("Bob", "bob@example.com")
