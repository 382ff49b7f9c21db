"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

Run with uvicorn's factory mode:

    uvicorn school.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from school import __version__
from school.presentation.api.exception_handlers import setup_exception_handlers
from school.presentation.api.routers import (
    auth_router,
    auth_users_router,
    users_router,
)
from school_config.settings import Settings, get_settings
from school_identity import JWTService, PasswordHashingService
from school_identity.infrastructure.persistence.sqlalchemy import (
    create_engine,
    create_session_maker,
    create_tables,
)


@lru_cache(maxsize=None)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    Sets up logging for the school packages with:
    - Console output with timestamps and module names
    - Configurable log level (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("school").setLevel(log_level)
    logging.getLogger("school_identity").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = __version__

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Registration and login.

**Registration & Login:**
- Register new accounts with name, email and password
- Login to obtain a JWT bearer token (valid for one hour)

**Security:**
- Passwords are hashed with bcrypt and never returned
- Tokens are stateless; send them as `Authorization: Bearer <token>`
""",
    },
    {
        "name": "Users",
        "description": """User directory and own profile.

All endpoints require a bearer token.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting %s API v%s...", app.state.settings.app_name, API_VERSION)
    engine = app.state.engine
    try:
        await create_tables(engine)
    except (ConnectionRefusedError, OSError):
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down %s API...", app.state.settings.app_name)
    await engine.dispose()
    logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are read once here and handed to the services that need them;
    nothing downstream reads the environment again.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.

    Raises
    ------
    pydantic.ValidationError
        If no settings are given and the environment lacks JWT_SECRET_KEY
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on app creation (not on module import)
    _configure_logging(settings.log_level)

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description=(
            "User registration, login and an authenticated user directory "
            "secured with **bcrypt** password hashes and **JWT** bearer tokens."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    engine = create_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    app.state.jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )
    app.state.password_service = PasswordHashingService(rounds=settings.bcrypt_rounds)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Register exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    app.include_router(auth_users_router, prefix="/auth", tags=["Users"])
    app.include_router(users_router, prefix="/users", tags=["Users"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Returns service status and version info.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with a welcome message."""
        return {
            "message": f"Welcome to the {app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "endpoints": {
                "health": "/health",
                "auth": "/auth",
                "users": "/users",
            },
        }

    return app
