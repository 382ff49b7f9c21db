"""Request and response schemas."""

from school.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from school.presentation.api.schemas.users import (
    UpdateUserRequest,
    UpdateUserResponse,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UpdateUserRequest",
    "UpdateUserResponse",
    "UserDetailResponse",
    "UserListResponse",
    "UserResponse",
]
