"""User account endpoints: registration, login, profile and administration."""

import logging

from fastapi import APIRouter, status

from blog_engine.api.dependencies import (
    AdminClaimsDep,
    CurrentClaimsDep,
    HasherDep,
    LimitQuery,
    PageQuery,
    TokenCodecDep,
    UserRepoDep,
)
from blog_engine.core.errors import Conflict, NotFound, Unauthorized
from blog_engine.core.settings import settings
from blog_engine.repositories import UserRepository
from blog_engine.schemas.common import BaseResponse, IdResponse
from blog_engine.schemas.user import (
    CreateUserByAdminRequest,
    DeleteUsersRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UpdateMyProfileRequest,
    UpdateUserRequest,
    UserInfo,
    UserInfoResponse,
    UserListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["users"])


def _ensure_available(repo: UserRepository, username: str | None, email: str | None) -> None:
    """Advisory duplicate check for friendlier messages; the table constraint decides."""
    if username is not None and repo.get_by_username_or_email(username) is not None:
        raise Conflict("Username already exists")
    if email is not None and repo.get_by_username_or_email(email) is not None:
        raise Conflict("Email already exists")


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    repo: UserRepoDep,
    hasher: HasherDep,
    codec: TokenCodecDep,
) -> RegisterResponse:
    """Create an account with the `user` role and return a session token.

    Raises:
        Conflict: If the username or email is already registered
    """
    _ensure_available(repo, payload.username, payload.email)
    user = repo.create(payload.username, payload.email, hasher.hash(payload.password))
    token = codec.issue_token(user.id, user.username, user.role)
    logger.info("Registered user %s (id=%d)", user.username, user.id)
    return RegisterResponse(token=token, user_id=user.id, message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    repo: UserRepoDep,
    hasher: HasherDep,
    codec: TokenCodecDep,
) -> LoginResponse:
    """Authenticate by username or email and return a session token.

    Unknown accounts and wrong passwords produce the same response.
    """
    user = repo.get_by_username_or_email(payload.username_or_email)
    if user is None or not hasher.verify(payload.password, user.password_hash):
        logger.warning("Failed login attempt for %r", payload.username_or_email)
        raise Unauthorized("Invalid username/email or password")

    token = codec.issue_token(user.id, user.username, user.role)
    return LoginResponse(
        token=token,
        user_info=UserInfo.model_validate(user),
        message="Login successful",
    )


@router.post("/logout", response_model=BaseResponse)
async def logout() -> BaseResponse:
    """Tokens are stateless; the client simply discards its copy."""
    return BaseResponse(message="Logout successful")


@router.get("/me", response_model=UserInfoResponse)
async def get_my_profile(claims: CurrentClaimsDep, repo: UserRepoDep) -> UserInfoResponse:
    """Return the authenticated caller's profile."""
    user = repo.get_by_id(claims.user_id)
    if user is None:
        raise NotFound("User not found")
    return UserInfoResponse(user=UserInfo.model_validate(user))


@router.put("/me", response_model=UserInfoResponse)
def update_my_profile(
    payload: UpdateMyProfileRequest,
    claims: CurrentClaimsDep,
    repo: UserRepoDep,
    hasher: HasherDep,
) -> UserInfoResponse:
    """Partially update the caller's username, email or password."""
    fields = payload.model_dump(exclude_unset=True, exclude={"password"})
    new_hash = hasher.hash(payload.password) if payload.password else None
    user = repo.update_profile(claims.user_id, fields, new_password_hash=new_hash)
    return UserInfoResponse(user=UserInfo.model_validate(user), message="Profile updated successfully")


@router.get("", response_model=UserListResponse)
async def list_users(
    _admin: AdminClaimsDep,
    repo: UserRepoDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
) -> UserListResponse:
    """Return one page of all users, ordered by id."""
    result = repo.list_paginated(page, limit)
    return UserListResponse(
        users=[UserInfo.model_validate(user) for user in result.items],
        total_pages=result.total_pages,
        current_page=result.page,
        total_users=result.total_count,
    )


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: CreateUserByAdminRequest,
    _admin: AdminClaimsDep,
    repo: UserRepoDep,
    hasher: HasherDep,
) -> IdResponse:
    """Create an account with an explicit role."""
    _ensure_available(repo, payload.username, payload.email)
    user = repo.create(
        payload.username,
        payload.email,
        hasher.hash(payload.password),
        role=payload.role,
    )
    return IdResponse(id=user.id, message="User created successfully")


@router.delete("", response_model=BaseResponse)
async def delete_users(
    payload: DeleteUsersRequest,
    _admin: AdminClaimsDep,
    repo: UserRepoDep,
) -> BaseResponse:
    """Delete every listed user that exists; unknown ids are ignored."""
    deleted = repo.delete_many(payload.user_ids)
    return BaseResponse(message=f"Successfully deleted {deleted} users")


@router.get("/{user_id}", response_model=UserInfoResponse)
async def get_user(user_id: int, _admin: AdminClaimsDep, repo: UserRepoDep) -> UserInfoResponse:
    """Return any user's profile."""
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFound("User not found")
    return UserInfoResponse(user=UserInfo.model_validate(user))


@router.put("/{user_id}", response_model=UserInfoResponse)
def update_user(
    user_id: int,
    payload: UpdateUserRequest,
    _admin: AdminClaimsDep,
    repo: UserRepoDep,
    hasher: HasherDep,
) -> UserInfoResponse:
    """Partially update any user, including their role."""
    fields = payload.model_dump(exclude_unset=True, exclude={"password"})
    new_hash = hasher.hash(payload.password) if payload.password else None
    user = repo.update_as_admin(user_id, fields, new_password_hash=new_hash)
    return UserInfoResponse(user=UserInfo.model_validate(user), message="User updated successfully")


@router.delete("/{user_id}", response_model=BaseResponse)
async def delete_user(user_id: int, _admin: AdminClaimsDep, repo: UserRepoDep) -> BaseResponse:
    """Delete a single user together with their posts, comments and favorites."""
    repo.delete(user_id)
    return BaseResponse(message="User deleted successfully")
