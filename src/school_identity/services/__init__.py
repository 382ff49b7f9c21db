"""Identity services - JWT and password hashing."""

from school_identity.services.jwt_service import JWTService
from school_identity.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
]
