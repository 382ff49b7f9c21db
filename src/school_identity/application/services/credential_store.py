"""Credential store: user records and their password hashes."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING
from uuid import UUID

from school_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidUpdateError,
    User,
    UserNotFoundError,
    UserProfile,
)

if TYPE_CHECKING:
    from school_identity.domain.user import UserRepository
    from school_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "email", "password"})


class CredentialStore:
    """
    Owns user records: identity plus salted password hash.

    Plaintext passwords only pass through on their way to the hasher.
    bcrypt is deliberately slow, so hashing and verification are pushed to a
    worker thread instead of running on the event loop.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service

    async def create(self, name: str, email: str, password: str) -> User:
        """
        Create a user with a freshly hashed password.

        Raises
        ------
        InvalidEmailError, InvalidNameError, WeakPasswordError
            If the input fails validation
        EmailAlreadyExistsError
            If the email is taken; the storage constraint catches races the
            pre-check misses
        """
        email_obj = Email(email)
        if await self._user_repo.find_by_email(email_obj) is not None:
            raise EmailAlreadyExistsError(email_obj.value)

        password_hash = await self._hash(password)
        user = User.create(name=name, email=email_obj, password_hash=password_hash)
        await self._user_repo.save(user)
        return user

    async def find_by_email(self, email: str) -> User | None:
        try:
            return await self._user_repo.find_by_email(email)
        except InvalidEmailError:
            return None

    async def find_by_id(self, user_id: UUID) -> User | None:
        return await self._user_repo.find_by_id(user_id)

    async def verify_password(self, password: str, user: User) -> bool:
        return await asyncio.to_thread(
            self._password_service.verify,
            password,
            user.password_hash,
        )

    async def list_all(self) -> list[UserProfile]:
        users = await self._user_repo.list_all()
        return [user.profile() for user in users]

    async def update(  # NOQA: PLR0913
        self,
        user_id: UUID,
        changed_fields: Iterable[str],
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        """
        Apply a profile update limited to ``changed_fields``.

        Only the password field triggers hashing; updating the name or email
        leaves the stored hash untouched.

        Parameters
        ----------
        user_id
            The user to update
        changed_fields
            Names of the fields that are part of this mutation
        name, email, password
            New values; each must be given if its field is listed

        Raises
        ------
        InvalidUpdateError
            If a field name is unknown or a listed field has no value
        UserNotFoundError
            If the user does not exist
        EmailAlreadyExistsError
            If the new email belongs to another user
        """
        changed = frozenset(changed_fields)
        unknown = changed - UPDATABLE_FIELDS
        if unknown:
            msg = f"Unknown fields: {', '.join(sorted(unknown))}"
            raise InvalidUpdateError(msg)

        values = {"name": name, "email": email, "password": password}
        missing = sorted(field for field in changed if values[field] is None)
        if missing:
            msg = f"No value given for: {', '.join(missing)}"
            raise InvalidUpdateError(msg)

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        if "name" in changed:
            user.rename(name)  # type: ignore[arg-type]
        if "email" in changed:
            new_email = Email(email)  # type: ignore[arg-type]
            if new_email.value != user.email:
                other = await self._user_repo.find_by_email(new_email)
                if other is not None and other.id != user.id:
                    raise EmailAlreadyExistsError(new_email.value)
                user.change_email(new_email)
        if "password" in changed:
            user.replace_password_hash(await self._hash(password))  # type: ignore[arg-type]

        if changed:
            await self._user_repo.save(user)
            logger.info(
                "Updated user %s (fields: %s)",
                user.id,
                ", ".join(sorted(changed)),
            )
        return user

    async def _hash(self, password: str) -> str:
        self._password_service.validate_strength(password)
        return await asyncio.to_thread(self._password_service.hash, password)
