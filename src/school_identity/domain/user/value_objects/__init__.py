"""Value objects for the user domain."""

from school_identity.domain.user.value_objects.email import Email
from school_identity.domain.user.value_objects.user_profile import UserProfile

__all__ = [
    "Email",
    "UserProfile",
]
