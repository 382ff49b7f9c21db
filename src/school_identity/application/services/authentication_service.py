"""Authentication service for user registration and login."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from school_identity.exceptions import InvalidCredentialsError, WeakPasswordError

if TYPE_CHECKING:
    from school_identity.application.services.credential_store import (
        CredentialStore,
    )
    from school_identity.domain.user import User
    from school_identity.schemas import TokenPayload
    from school_identity.services import JWTService, PasswordHashingService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates the credential store (user records, password hashes) and
    the JWT service (session tokens) to provide:
    - User registration
    - Login with password
    - Token verification for protected requests
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._store = credential_store
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def register(self, name: str, email: str, password: str) -> User:
        user = await self._store.create(name=name, email=email, password=password)
        logger.info("User registered: %s", user.email)
        return user

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue a session token.

        Unknown email and wrong password raise the same error, and an
        unknown email still pays for one bcrypt comparison.

        Raises
        ------
        InvalidCredentialsError
            If the email is unknown or the password does not match
        """
        user = await self._store.find_by_email(email)
        if user is None:
            await asyncio.to_thread(self._password_service.dummy_verify, password)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError

        if not await self._store.verify_password(password, user):
            logger.warning("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError

        if self._password_service.needs_rehash(user.password_hash):
            try:
                user = await self._store.update(
                    user.id,
                    {"password"},
                    password=password,
                )
                logger.info("Rehashed password for user %s", user.id)
            except WeakPasswordError:
                # Predates the current policy; keep the old hash
                logger.debug("Skipped rehash for user %s", user.id)

        token = self._jwt_service.issue(user.id)

        logger.info("User logged in: %s", user.email)
        return user, token

    def authenticate(self, token: str | None) -> TokenPayload:
        return self._jwt_service.verify(token)
