"""Users router: listing and the caller's own profile."""

import logging

from fastapi import APIRouter, HTTPException, status

from school.presentation.api.dependencies import (
    CredentialStoreDep,
    CurrentIdentity,
    DBSession,
)
from school.presentation.api.schemas.users import (
    UpdateUserRequest,
    UpdateUserResponse,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
)
from school_identity import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidNameError,
    InvalidUpdateError,
    UserNotFoundError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

USER_NOT_FOUND_DETAIL = "User not found"


async def list_users(
    identity: CurrentIdentity,
    credential_store: CredentialStoreDep,
) -> UserListResponse:
    """
    List all registered users.

    Requires a valid bearer token. Only public fields are returned.
    """
    try:
        profiles = await credential_store.list_all()
    except Exception as e:
        logger.exception("Listing users failed for %s: %s", identity.user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error fetching users",
        ) from e

    return UserListResponse(
        users=[UserResponse.from_profile(profile) for profile in profiles],
    )


router.add_api_route(
    "",
    list_users,
    methods=["GET"],
    summary="List all users",
    responses={
        200: {"description": "All users (id, name, email)"},
        401: {"description": "No bearer token"},
        403: {"description": "Invalid or expired token"},
        500: {"description": "Server error fetching users"},
    },
)

# Same listing, served under /auth/users as well
auth_users_router = APIRouter()
auth_users_router.add_api_route(
    "/users",
    list_users,
    methods=["GET"],
    include_in_schema=False,
)


@router.get(
    "/me",
    summary="Get the authenticated user",
    responses={
        200: {"description": "The caller's profile"},
        404: {"description": "User no longer exists"},
    },
)
async def get_me(
    identity: CurrentIdentity,
    credential_store: CredentialStoreDep,
) -> UserDetailResponse:
    """Return the profile of the token's subject."""
    user = await credential_store.find_by_id(identity.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=USER_NOT_FOUND_DETAIL,
        )
    return UserDetailResponse(user=UserResponse.from_profile(user.profile()))


@router.patch(
    "/me",
    summary="Update the authenticated user",
    responses={
        200: {"description": "User updated successfully"},
        400: {"description": "Invalid input or email already taken"},
        404: {"description": "User no longer exists"},
        500: {"description": "Server error updating user"},
    },
)
async def update_me(
    request: UpdateUserRequest,
    identity: CurrentIdentity,
    credential_store: CredentialStoreDep,
    session: DBSession,
) -> UpdateUserResponse:
    """
    Change name, email and/or password.

    Only fields present in the body are applied. The password is re-hashed
    only when a new one is sent.
    """
    try:
        user = await credential_store.update(
            identity.user_id,
            request.model_fields_set,
            name=request.name,
            email=request.email,
            password=request.password,
        )
        await session.commit()

    except UserNotFoundError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=USER_NOT_FOUND_DETAIL,
        ) from e
    except EmailAlreadyExistsError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        ) from e
    except (
        InvalidEmailError,
        InvalidNameError,
        InvalidUpdateError,
        WeakPasswordError,
    ) as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid input: {e}",
        ) from e
    except Exception as e:
        await session.rollback()
        logger.exception("Updating user %s failed: %s", identity.user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error updating user",
        ) from e

    return UpdateUserResponse(
        message="User updated successfully",
        user=UserResponse.from_profile(user.profile()),
    )
