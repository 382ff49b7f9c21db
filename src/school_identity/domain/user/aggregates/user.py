"""User aggregate: identity plus the stored password hash."""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from school_identity.domain.shared.time import ensure_tz_aware, utc_now
from school_identity.domain.user.exceptions import InvalidNameError
from school_identity.domain.user.value_objects import Email, UserProfile

MAX_NAME_LENGTH = 255


def _validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        msg = "Name cannot be empty"
        raise InvalidNameError(msg)
    if len(cleaned) > MAX_NAME_LENGTH:
        msg = f"Name cannot exceed {MAX_NAME_LENGTH} characters"
        raise InvalidNameError(msg)
    return cleaned


class User:
    """
    User aggregate root.

    Holds the user's identity and the bcrypt hash of their password. The
    aggregate never sees a plaintext password: hashing happens in the
    CredentialStore before a hash is handed in.
    """

    def __init__(  # NOQA: PLR0913
        self,
        name: str,
        email: Union[str, Email],
        password_hash: str,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._name = _validate_name(name)
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._id = id or uuid4()
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def rename(self, name: str) -> None:
        self._name = _validate_name(name)
        self._updated_at = utc_now()

    def change_email(self, email: Union[str, Email]) -> None:
        self._email = email if isinstance(email, Email) else Email(email)
        self._updated_at = utc_now()

    def replace_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def profile(self) -> UserProfile:
        return UserProfile(id=self._id, name=self._name, email=self._email.value)

    @classmethod
    def create(
        cls,
        name: str,
        email: Union[str, Email],
        password_hash: str,
    ) -> "User":
        return cls(name=name, email=email, password_hash=password_hash)

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        name: str,
        email: Union[str, Email],
        password_hash: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=ensure_tz_aware(created_at),
            updated_at=ensure_tz_aware(updated_at),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value})"
