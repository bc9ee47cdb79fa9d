"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from blog_engine.models.role import Role
from blog_engine.schemas.common import BaseResponse

USERNAME_FIELD = Field(..., min_length=3, max_length=20, description="Unique login name (3-20 characters)")
PASSWORD_FIELD = Field(..., min_length=6, max_length=128, description="Raw password, at least 6 characters")


class RegisterRequest(BaseModel):
    """Schema for self-service registration."""

    username: str = USERNAME_FIELD
    email: EmailStr
    password: str = PASSWORD_FIELD


class RegisterResponse(BaseResponse):
    """Registration result carrying a ready-to-use session token."""

    token: str = Field(..., description="JWT access token")
    user_id: int


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username_or_email: str = Field(..., min_length=1, description="Username or email address")
    password: str = Field(..., min_length=1)


class UserInfo(BaseModel):
    """Public user fields; the password hash is never exposed."""

    id: int
    username: str
    email: str
    role: Role
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseResponse):
    """Response returned after a successful login."""

    token: str = Field(..., description="JWT access token")
    user_info: UserInfo


class UserInfoResponse(BaseResponse):
    """Single user payload."""

    user: UserInfo


class UserListResponse(BaseResponse):
    """One page of users."""

    users: list[UserInfo]
    total_pages: int
    current_page: int
    total_users: int


class UpdateMyProfileRequest(BaseModel):
    """Partial self-update; omitted or null fields are left unchanged."""

    username: str | None = Field(None, min_length=3, max_length=20)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=128)


class UpdateUserRequest(UpdateMyProfileRequest):
    """Partial administrative update, which may also change the role."""

    role: Role | None = None


class CreateUserByAdminRequest(BaseModel):
    """Administrative account creation with an explicit role."""

    username: str = USERNAME_FIELD
    email: EmailStr
    password: str = PASSWORD_FIELD
    role: Role = Role.USER


class DeleteUsersRequest(BaseModel):
    """Batch deletion payload."""

    user_ids: list[int] = Field(..., description="Ids of the users to delete")
