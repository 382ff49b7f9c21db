"""Pytest fixtures for API tests.

Every test gets its own application backed by a fresh in-memory SQLite
database. The client is entered as a context manager so the lifespan
(table creation, engine disposal) runs.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from school.presentation.api.app import create_app
from school_config.settings import Settings
from tests.shared.fixtures.api import JOHN, TEST_JWT_SECRET


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        database_url="sqlite+aiosqlite://",
        bcrypt_rounds=4,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        _env_file=None,
    )


@pytest.fixture
def app(api_settings):
    return create_app(api_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client) -> dict:
    """Register John Doe and return the response body."""
    response = client.post("/auth/register", json=JOHN)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(client, registered_user) -> dict[str, str]:
    """Bearer header for John Doe."""
    response = client.post(
        "/auth/login",
        json={"email": JOHN["email"], "password": JOHN["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
