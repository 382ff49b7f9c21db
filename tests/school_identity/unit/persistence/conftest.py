"""
Pytest configuration for persistence unit tests.

Uses an in-memory SQLite database; no container needed.
"""

from tests.shared.fixtures.database import sqlite_engine, sqlite_session

__all__ = [
    "sqlite_engine",
    "sqlite_session",
]
