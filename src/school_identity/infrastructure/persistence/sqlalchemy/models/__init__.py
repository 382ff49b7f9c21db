"""SQLAlchemy models for identity persistence."""

from school_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = ["UserModel"]
