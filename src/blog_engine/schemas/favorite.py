"""Favorite-related Pydantic schemas."""

from pydantic import BaseModel, Field

from blog_engine.schemas.common import BaseResponse
from blog_engine.schemas.post import PostInfo


class ToggleFavoriteRequest(BaseModel):
    """Post whose favorite state should flip."""

    post_id: int = Field(..., ge=1)


class ToggleFavoriteResponse(BaseResponse):
    """Favorite state after a toggle."""

    favorited: bool


class FavoriteStatusResponse(BaseResponse):
    """Caller's favorite state plus the post's favorite count."""

    favorited: bool
    count: int


class FavoriteListResponse(BaseResponse):
    """One page of the caller's favorited posts."""

    favorites: list[PostInfo]
    total_pages: int
    current_page: int
    total_favorites: int
