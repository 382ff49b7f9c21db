"""User schemas for request/response models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from school_identity.domain.user import UserProfile


class UserResponse(BaseModel):
    """Public user data: id, name and email only."""

    id: UUID
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserResponse":
        return cls(id=profile.id, name=profile.name, email=profile.email)


class UserListResponse(BaseModel):
    """Response schema for the user listing."""

    users: list[UserResponse]


class UserDetailResponse(BaseModel):
    """Response schema wrapping a single user."""

    user: UserResponse


class UpdateUserRequest(BaseModel):
    """Request schema for profile updates.

    Only the fields present in the request body are changed.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=1)


class UpdateUserResponse(BaseModel):
    """Response schema for a successful profile update."""

    message: str
    user: UserResponse
