"""User domain manages user identity and stored credentials.

This domain handles:
- User aggregate (identity: id, name, email, password hash)
- Public profile view (never exposes the hash)
- Repository contract with storage-enforced email uniqueness
"""

from school_identity.domain.user.aggregates import User
from school_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidNameError,
    InvalidUpdateError,
    UserNotFoundError,
)
from school_identity.domain.user.repositories import UserRepository
from school_identity.domain.user.value_objects import Email, UserProfile

__all__ = [
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidNameError",
    "InvalidUpdateError",
    "User",
    "UserNotFoundError",
    "UserProfile",
    "UserRepository",
]
