"""API routers."""

from school.presentation.api.routers.auth import router as auth_router
from school.presentation.api.routers.users import (
    auth_users_router,
)
from school.presentation.api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "auth_users_router",
    "users_router",
]
