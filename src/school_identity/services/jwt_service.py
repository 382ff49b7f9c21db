"""JWT token service.

Issues and verifies the stateless session tokens handed out at login.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from school_identity.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    MissingTokenError,
)
from school_identity.schemas import TokenPayload


class JWTService:
    """Service for session token issuance and verification.

    Tokens are HS256-signed JWTs carrying the user id (``sub``), the issue
    time (``iat``) and the expiry (``exp``). Nothing is stored server side:
    a token is valid from issuance until ``exp`` and cannot be revoked.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue(user_id)
    >>> payload = service.verify(token)
    >>> print(payload.user_id)
    """

    DEFAULT_EXPIRE_HOURS = 1
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_hours
            Hours until a token expires (default 1)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(hours=access_token_expire_hours)

    @property
    def expires_in_seconds(self) -> int:
        return int(self._expire.total_seconds())

    def issue(
        self,
        user_id: UUID,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed token for a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        expires_delta
            Custom expiration time (optional, defaults to the configured
            lifetime)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._expire)

        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify(self, token: str | None) -> TokenPayload:
        """Verify and decode a token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        MissingTokenError
            If no token was given
        ExpiredTokenError
            If the expiry timestamp has passed
        InvalidSignatureError
            If the signature does not match
        MalformedTokenError
            If the token cannot be decoded or lacks required claims
        """
        if not token:
            raise MissingTokenError

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
            user_id = UUID(str(payload["sub"]))
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            issued_at = (
                datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
                if "iat" in payload
                else None
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError from e
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Malformed token: {e}") from e
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise MalformedTokenError(f"Malformed token payload: {e}") from e

        return TokenPayload(
            user_id=user_id,
            issued_at=issued_at,
            expires_at=expires_at,
        )
