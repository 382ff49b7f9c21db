"""School API - authentication-gated user service."""

__version__ = "1.0.0"
