"""Public view of a user."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """What may be shown about a user: never the password hash."""

    id: UUID
    name: str
    email: str
