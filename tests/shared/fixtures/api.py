"""Shared constants for API tests."""

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only-0123456789"

JOHN = {"name": "John Doe", "email": "john@x.com", "password": "secret123"}
JANE = {"name": "Jane Roe", "email": "jane@x.com", "password": "hunter22!"}
