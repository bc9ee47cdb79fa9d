# src/blog_engine/api/endpoints/posts.py
"""Post-related endpoints, including the comment threads nested under a post."""

import logging

from fastapi import APIRouter, Query, status

from blog_engine.api.dependencies import (
    AdminClaimsDep,
    CommentRepoDep,
    CurrentClaimsDep,
    LimitQuery,
    OptionalClaimsDep,
    PageQuery,
    PostRepoDep,
    can_manage_post,
    get_visible_post,
)
from blog_engine.core.errors import BlogError, Forbidden, NotFound
from blog_engine.core.security import Claims
from blog_engine.core.settings import settings
from blog_engine.models import Post
from blog_engine.repositories import PostFilters, PostRepository
from blog_engine.schemas.comment import (
    CommentBody,
    CommentInfo,
    CommentListResponse,
)
from blog_engine.schemas.common import BaseResponse, IdResponse
from blog_engine.schemas.post import (
    DeletePostsRequest,
    PostCreate,
    PostDetailResponse,
    PostInfo,
    PostListResponse,
    PostUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/post", tags=["posts"])


def _get_managed_post(repo: PostRepository, post_id: int, claims: Claims) -> Post:
    post = repo.get_by_id(post_id)
    if post is None:
        raise NotFound("Post not found")
    if not can_manage_post(post, claims):
        raise Forbidden("Only the author or an admin can modify this post")
    return post


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, claims: CurrentClaimsDep, repo: PostRepoDep) -> IdResponse:
    """Create a post authored by the caller; it is a draft unless `is_published` is set."""
    post = repo.create(payload.to_fields(), author_id=claims.user_id)
    return IdResponse(id=post.id, message="Post created successfully")


@router.get("", response_model=PostListResponse)
async def list_posts(
    repo: PostRepoDep,
    claims: OptionalClaimsDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
    category: str | None = Query(None, description="Exact category match"),
    query: str | None = Query(None, description="Substring searched in title or content"),
    published_only: bool = Query(True, description="Only honoured for admins"),
    author_id: int | None = Query(None, ge=1),
) -> PostListResponse:
    """List posts, newest first.

    Args:
        repo: Post store
        claims: Caller's claims, if a token was sent
        page: 1-indexed page number
        limit: Page size
        category: Optional category filter
        query: Optional search string
        published_only: Whether drafts are excluded
        author_id: Optional author filter

    Returns:
        One page of posts with pagination totals
    """
    is_admin = claims is not None and claims.is_admin
    filters = PostFilters(
        page=page,
        page_size=limit,
        category=category,
        search_query=query,
        published_only=published_only if is_admin else True,
        author_id=author_id,
    )
    result = repo.list_paginated(filters)
    return PostListResponse(
        posts=[PostInfo.model_validate(post) for post in result.items],
        total_pages=result.total_pages,
        current_page=result.page,
        total_posts=result.total_count,
    )


@router.delete("", response_model=BaseResponse)
async def delete_posts(payload: DeletePostsRequest, _admin: AdminClaimsDep, repo: PostRepoDep) -> BaseResponse:
    """Delete every listed post that exists; unknown ids are ignored."""
    deleted = repo.delete_many(payload.post_ids)
    return BaseResponse(message=f"Successfully deleted {deleted} posts")


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(post_id: int, repo: PostRepoDep, claims: OptionalClaimsDep) -> PostDetailResponse:
    """Return a single post and count the view.

    A failed view-count update is logged and does not fail the read.
    """
    post = get_visible_post(repo, post_id, claims)
    try:
        repo.increment_view_count(post_id)
    except BlogError as err:
        logger.warning("Failed to increment view count for post %d: %s", post_id, err)
    # The commit expired `post`, so the new count is reloaded on access.
    return PostDetailResponse(post=PostInfo.model_validate(post))


@router.put("/{post_id}", response_model=PostDetailResponse)
async def update_post(
    post_id: int,
    payload: PostUpdate,
    claims: CurrentClaimsDep,
    repo: PostRepoDep,
) -> PostDetailResponse:
    """Partially update a post; only its author or an admin may do so."""
    _get_managed_post(repo, post_id, claims)
    post = repo.update(post_id, payload.to_fields())
    return PostDetailResponse(post=PostInfo.model_validate(post), message="Post updated successfully")


@router.delete("/{post_id}", response_model=BaseResponse)
async def delete_post(post_id: int, claims: CurrentClaimsDep, repo: PostRepoDep) -> BaseResponse:
    """Delete a post with its comments and favorites; only its author or an admin may do so."""
    _get_managed_post(repo, post_id, claims)
    repo.delete(post_id)
    return BaseResponse(message="Post deleted successfully")


@router.get("/{post_id}/comments", response_model=CommentListResponse)
async def list_post_comments(
    post_id: int,
    repo: PostRepoDep,
    comments: CommentRepoDep,
    claims: OptionalClaimsDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
) -> CommentListResponse:
    """List a post's comments, newest first."""
    get_visible_post(repo, post_id, claims)
    result = comments.list_by_post_paginated(post_id, page, limit)
    return CommentListResponse(
        comments=[CommentInfo.model_validate(comment) for comment in result.items],
        total_pages=result.total_pages,
        current_page=result.page,
        total_comments=result.total_count,
    )


@router.post("/{post_id}/comments", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def create_post_comment(
    post_id: int,
    payload: CommentBody,
    claims: CurrentClaimsDep,
    repo: PostRepoDep,
    comments: CommentRepoDep,
) -> IdResponse:
    """Comment on a post, optionally replying to one of its comments."""
    get_visible_post(repo, post_id, claims)
    comment = comments.create(payload.content, post_id, claims.user_id, parent_id=payload.parent_id)
    return IdResponse(id=comment.id, message="Comment created successfully")
