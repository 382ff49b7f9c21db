"""School Identity - users, credentials and session tokens.

This package handles all identity-related concerns:
- User records with salted password hashes (CredentialStore)
- Password hashing (bcrypt) and verification
- Stateless session tokens (JWT) issuance and verification
- Registration and login orchestration (AuthenticationService)

Architecture:
    school_identity/
    ├── domain/            # User aggregate, value objects, repository contract
    ├── application/       # CredentialStore, AuthenticationService
    ├── services/          # Pure logic (password hashing, JWT)
    ├── infrastructure/    # SQLAlchemy persistence
    ├── schemas.py         # Data classes
    └── exceptions.py      # Auth exceptions
"""

from school_identity.application.services import (
    AuthenticationService,
    CredentialStore,
)
from school_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidNameError,
    InvalidUpdateError,
    User,
    UserNotFoundError,
    UserProfile,
    UserRepository,
)
from school_identity.exceptions import (
    AuthError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidSignatureError,
    InvalidTokenError,
    MalformedTokenError,
    MissingTokenError,
    WeakPasswordError,
)
from school_identity.schemas import TokenPayload
from school_identity.services import (
    JWTService,
    PasswordHashingService,
)

__all__ = [
    # Application
    "AuthenticationService",
    "CredentialStore",
    # Domain - User
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidNameError",
    "InvalidUpdateError",
    "User",
    "UserNotFoundError",
    "UserProfile",
    "UserRepository",
    # Exceptions
    "AuthError",
    "ExpiredTokenError",
    "InvalidCredentialsError",
    "InvalidSignatureError",
    "InvalidTokenError",
    "MalformedTokenError",
    "MissingTokenError",
    "WeakPasswordError",
    # Schemas
    "TokenPayload",
    # Services
    "JWTService",
    "PasswordHashingService",
]
