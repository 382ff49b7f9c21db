"""FastAPI dependency injection for the School API.

Provides dependencies for:
- Services built once in create_app (kept on app.state)
- Database sessions
- The request authentication guard (identity from the bearer token)
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from school_identity import (
    AuthenticationService,
    CredentialStore,
    InvalidTokenError,
    JWTService,
    MissingTokenError,
    PasswordHashingService,
    TokenPayload,
)
from school_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

MISSING_TOKEN_DETAIL = "Not authorized, no token"
INVALID_TOKEN_DETAIL = "Forbidden, invalid or expired token"


# -----------------------------------------------------------------------------
# Configuration & Singletons
# -----------------------------------------------------------------------------


def get_jwt_service(request: Request) -> JWTService:
    """JWT service configured once from the signing secret."""
    return request.app.state.jwt_service


def get_password_service(request: Request) -> PasswordHashingService:
    """Password hashing service configured with the bcrypt work factor."""
    return request.app.state.password_service


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the application's
    shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Identity Services
# -----------------------------------------------------------------------------


def get_credential_store(
    session: DBSession,
    password_service: PasswordServiceDep,
) -> CredentialStore:
    """Credential store bound to the request's database session."""
    return CredentialStore(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
    )


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]


def get_authentication_service(
    credential_store: CredentialStoreDep,
    password_service: PasswordServiceDep,
    jwt_service: JWTServiceDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates user registration, login, and token checks.
    """
    return AuthenticationService(
        credential_store=credential_store,
        password_service=password_service,
        jwt_service=jwt_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current Identity (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_identity(
    request: Request,
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenPayload:
    """
    Request authentication guard.

    Reads ``Authorization: Bearer <token>`` and has the authentication
    service verify it; no user lookup happens here. The decoded identity is
    returned to the handler and also stored on ``request.state.user_id``.

    Raises
    ------
    HTTPException
        401 if no bearer token was sent, 403 if the token is invalid or
        expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_TOKEN_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = auth_service.authenticate(credentials.credentials)
    except MissingTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_TOKEN_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except InvalidTokenError as e:
        logger.warning("Rejected token on %s: %s", request.url.path, e.message)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=INVALID_TOKEN_DETAIL,
        ) from e

    request.state.user_id = payload.user_id
    return payload


# Type alias for injected identity
CurrentIdentity = Annotated[TokenPayload, Depends(get_current_identity)]
