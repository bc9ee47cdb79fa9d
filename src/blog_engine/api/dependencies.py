"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from blog_engine.core.errors import Forbidden, NotFound, Unauthorized
from blog_engine.core.security import (
    Claims,
    PasswordHasher,
    TokenCodec,
    get_password_hasher,
    get_token_codec,
)
from blog_engine.core.settings import settings
from blog_engine.db.session import get_db
from blog_engine.models import Post
from blog_engine.repositories import (
    CommentRepository,
    FavoriteRepository,
    PostRepository,
    UserRepository,
)

# HTTP Bearer scheme; missing headers are reported by get_current_claims itself.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]
HasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_current_claims(credentials: BearerDep, codec: TokenCodecDep) -> Claims:
    """Get the claims of the caller's bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        codec: Token codec holding the signing secret

    Returns:
        Verified claims for the authenticated caller

    Raises:
        Unauthorized: If the header is missing, or InvalidToken/TokenExpired
            if the token does not verify
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing bearer token")
    return codec.verify_token(credentials.credentials)


def get_optional_claims(credentials: BearerDep, codec: TokenCodecDep) -> Claims | None:
    """Like get_current_claims, but anonymous callers yield None.

    A token that is present but invalid is still rejected.
    """
    if credentials is None or not credentials.credentials:
        return None
    return codec.verify_token(credentials.credentials)


CurrentClaimsDep = Annotated[Claims, Depends(get_current_claims)]
OptionalClaimsDep = Annotated[Claims | None, Depends(get_optional_claims)]


def require_admin(claims: CurrentClaimsDep) -> Claims:
    """Return the caller's claims if they carry the admin role.

    Raises:
        Forbidden: If the caller is authenticated but not an admin
    """
    if not claims.is_admin:
        raise Forbidden("Admin privileges required")
    return claims


AdminClaimsDep = Annotated[Claims, Depends(require_admin)]


def get_user_repository(db: SessionDep) -> UserRepository:
    return UserRepository(db)


def get_post_repository(db: SessionDep) -> PostRepository:
    return PostRepository(db)


def get_comment_repository(db: SessionDep) -> CommentRepository:
    return CommentRepository(db)


def get_favorite_repository(db: SessionDep) -> FavoriteRepository:
    return FavoriteRepository(db)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
FavoriteRepoDep = Annotated[FavoriteRepository, Depends(get_favorite_repository)]

# 1-indexed pagination parameters shared by every list endpoint
PageQuery = Annotated[int, Query(ge=1, description="1-indexed page number")]
LimitQuery = Annotated[
    int,
    Query(ge=1, le=settings.max_page_size, description="Items per page"),
]


def can_manage_post(post: Post, claims: Claims | None) -> bool:
    """Return True if the caller is the post's author or an admin."""
    return claims is not None and (claims.is_admin or claims.user_id == post.author_id)


def get_visible_post(repo: PostRepository, post_id: int, claims: Claims | None) -> Post:
    """Return the post if the caller may read it; drafts are hidden from other users.

    Raises:
        NotFound: If the post is missing or is a draft the caller cannot see
    """
    post = repo.get_by_id(post_id)
    if post is None or (not post.is_published and not can_manage_post(post, claims)):
        raise NotFound("Post not found")
    return post
