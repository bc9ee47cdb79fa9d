"""Favorite endpoints: toggle, status and the caller's favorites list."""

from fastapi import APIRouter

from blog_engine.api.dependencies import (
    CurrentClaimsDep,
    FavoriteRepoDep,
    LimitQuery,
    PageQuery,
    PostRepoDep,
    get_visible_post,
)
from blog_engine.core.settings import settings
from blog_engine.schemas.favorite import (
    FavoriteListResponse,
    FavoriteStatusResponse,
    ToggleFavoriteRequest,
    ToggleFavoriteResponse,
)
from blog_engine.schemas.post import PostInfo

router = APIRouter(prefix="/post_fav", tags=["favorites"])


@router.post("", response_model=ToggleFavoriteResponse)
async def toggle_favorite(
    payload: ToggleFavoriteRequest,
    claims: CurrentClaimsDep,
    repo: FavoriteRepoDep,
    posts: PostRepoDep,
) -> ToggleFavoriteResponse:
    """Favorite the post, or remove the favorite if it already exists."""
    get_visible_post(posts, payload.post_id, claims)
    favorited = repo.toggle(claims.user_id, payload.post_id)
    message = "Post added to favorites" if favorited else "Post removed from favorites"
    return ToggleFavoriteResponse(favorited=favorited, message=message)


@router.get("/my/list", response_model=FavoriteListResponse)
async def list_my_favorites(
    claims: CurrentClaimsDep,
    repo: FavoriteRepoDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
) -> FavoriteListResponse:
    """Return the caller's favorited posts, most recently favorited first.

    Drafts by other authors are left out, even if they were favorited before
    being unpublished.
    """
    result = repo.list_user_favorites_paginated(
        claims.user_id, page, limit, include_unpublished=claims.is_admin
    )
    return FavoriteListResponse(
        favorites=[PostInfo.model_validate(post) for post in result.items],
        total_pages=result.total_pages,
        current_page=result.page,
        total_favorites=result.total_count,
    )


@router.get("/{post_id}/status", response_model=FavoriteStatusResponse)
async def favorite_status(
    post_id: int,
    claims: CurrentClaimsDep,
    repo: FavoriteRepoDep,
    posts: PostRepoDep,
) -> FavoriteStatusResponse:
    """Return whether the caller favorited the post and how many users did."""
    get_visible_post(posts, post_id, claims)
    return FavoriteStatusResponse(
        favorited=repo.is_favorited(claims.user_id, post_id),
        count=repo.count_for_post(post_id),
    )
