"""Authentication router for user registration and login."""

import logging

from fastapi import APIRouter, HTTPException, status

from school.presentation.api.dependencies import AuthService, DBSession, JWTServiceDep
from school.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from school.presentation.api.schemas.users import UserResponse
from school_identity import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidNameError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

USER_EXISTS_DETAIL = "User already exists"
INVALID_CREDENTIALS_DETAIL = "Invalid credentials"


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "User already exists or invalid input"},
        500: {"description": "Server error during registration"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> RegisterResponse:
    """
    Create an account from name, email and password.

    The password is hashed before it is stored and is never echoed back.
    """
    try:
        user = await auth_service.register(
            name=request.name,
            email=request.email,
            password=request.password,
        )
        await session.commit()

    except EmailAlreadyExistsError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=USER_EXISTS_DETAIL,
        ) from e
    except (InvalidEmailError, InvalidNameError, WeakPasswordError) as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid input: {e}",
        ) from e
    except Exception as e:
        await session.rollback()
        logger.exception("Registration failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during registration",
        ) from e

    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.from_profile(user.profile()),
    )


@router.post(
    "/login",
    summary="Log in a user and get a JWT token",
    responses={
        200: {"description": "Logged in successfully"},
        400: {"description": "Invalid credentials"},
        500: {"description": "Server error during login"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
    jwt_service: JWTServiceDep,
) -> LoginResponse:
    """
    Authenticate with email and password.

    Unknown email and wrong password get the same answer.
    """
    try:
        _, token = await auth_service.login(
            email=request.email,
            password=request.password,
        )
        # Persists an upgraded hash if login rehashed the password
        await session.commit()

    except InvalidCredentialsError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_CREDENTIALS_DETAIL,
        ) from e
    except Exception as e:
        await session.rollback()
        logger.exception("Login failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during login",
        ) from e

    return LoginResponse(
        message="Logged in successfully",
        token=token,
        expires_in=jwt_service.expires_in_seconds,
    )
