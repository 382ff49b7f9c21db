"""Application services for identity management."""

from school_identity.application.services.authentication_service import (
    AuthenticationService,
)
from school_identity.application.services.credential_store import CredentialStore

__all__ = ["AuthenticationService", "CredentialStore"]
