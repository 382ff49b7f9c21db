"""
Pytest configuration for school_identity tests.

This conftest provides fixtures specific to the identity package
(users, credentials, tokens).
"""

import pytest

from school_identity import JWTService, PasswordHashingService, User

TEST_SECRET = "test-jwt-secret-for-testing-only-0123456789"


@pytest.fixture
def password_service() -> PasswordHashingService:
    """Password service with low rounds for fast tests."""
    return PasswordHashingService(rounds=4)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key=TEST_SECRET)


@pytest.fixture
def test_user(password_service) -> User:
    """Create a standard test user with a real bcrypt hash."""
    return User.create(
        name="John Doe",
        email="john@example.com",
        password_hash=password_service.hash("secret123"),
    )
