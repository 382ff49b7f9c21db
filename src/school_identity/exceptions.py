"""Identity and authentication exceptions.

These exceptions are raised by the school_identity package and should be
caught and handled by the application or presentation layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class MissingTokenError(AuthError):
    """Raised when no bearer token was presented."""

    def __init__(self, message: str = "No token provided"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class MalformedTokenError(InvalidTokenError):
    """Raised when a token cannot be decoded or lacks required claims."""

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a token's expiry timestamp has passed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class InvalidSignatureError(InvalidTokenError):
    """Raised when a token's signature does not match its contents."""

    def __init__(self, message: str = "Token signature is invalid"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
