"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Union
from uuid import UUID

from school_identity.domain.user.aggregates import User
from school_identity.domain.user.value_objects import Email


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        """
        Find a user by their email address.

        Parameters
        ----------
        email
            The user's email address (string or Email value object)

        Returns
        -------
        User if found, None otherwise

        Raises
        ------
        InvalidEmailError
            If email format is invalid
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """
        Save or update a user.

        If the user exists (by ID), updates it.
        If the user doesn't exist, creates it.

        Raises
        ------
        EmailAlreadyExistsError
            If email is already in use by another user. Implementations
            must rely on a storage-level uniqueness constraint so that
            concurrent saves cannot both succeed.
        """

    @abstractmethod
    async def list_all(self) -> list[User]:
        """Return all users ordered by creation time."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of registered users."""
