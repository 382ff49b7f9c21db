"""FastAPI application for the School API."""

from school.presentation.api.app import create_app

__all__ = ["create_app"]
