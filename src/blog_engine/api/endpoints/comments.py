"""Comment endpoints addressed by comment id."""

from fastapi import APIRouter, status

from blog_engine.api.dependencies import (
    CommentRepoDep,
    CurrentClaimsDep,
    OptionalClaimsDep,
    PostRepoDep,
    get_visible_post,
)
from blog_engine.core.errors import Forbidden, NotFound
from blog_engine.models import Comment
from blog_engine.repositories import CommentRepository
from blog_engine.schemas.comment import (
    CommentCreate,
    CommentInfo,
    CommentResponse,
    CommentUpdate,
)
from blog_engine.schemas.common import BaseResponse, IdResponse

router = APIRouter(prefix="/comment", tags=["comments"])


def _get_comment(repo: CommentRepository, comment_id: int) -> Comment:
    comment = repo.get_by_id(comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    return comment


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate,
    claims: CurrentClaimsDep,
    repo: CommentRepoDep,
    posts: PostRepoDep,
) -> IdResponse:
    """Comment on the post named in the body."""
    get_visible_post(posts, payload.post_id, claims)
    comment = repo.create(payload.content, payload.post_id, claims.user_id, parent_id=payload.parent_id)
    return IdResponse(id=comment.id, message="Comment created successfully")


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: int,
    repo: CommentRepoDep,
    posts: PostRepoDep,
    claims: OptionalClaimsDep,
) -> CommentResponse:
    """Return a single comment; comments on drafts follow the post's visibility."""
    comment = _get_comment(repo, comment_id)
    try:
        get_visible_post(posts, comment.post_id, claims)
    except NotFound as err:
        raise NotFound("Comment not found") from err
    return CommentResponse(comment=CommentInfo.model_validate(comment))


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    claims: CurrentClaimsDep,
    repo: CommentRepoDep,
) -> CommentResponse:
    """Replace a comment's content; only its author or an admin may do so."""
    comment = _get_comment(repo, comment_id)
    if not (claims.is_admin or comment.user_id == claims.user_id):
        raise Forbidden("Only the comment author or an admin can edit this comment")
    comment = repo.update(comment_id, payload.content)
    return CommentResponse(comment=CommentInfo.model_validate(comment), message="Comment updated successfully")


@router.delete("/{comment_id}", response_model=BaseResponse)
async def delete_comment(
    comment_id: int,
    claims: CurrentClaimsDep,
    repo: CommentRepoDep,
    posts: PostRepoDep,
) -> BaseResponse:
    """Delete a comment and all replies beneath it.

    Allowed for the comment author, the author of the post it belongs to, or an admin.
    """
    comment = _get_comment(repo, comment_id)
    if not (claims.is_admin or comment.user_id == claims.user_id):
        post = posts.get_by_id(comment.post_id)
        if post is None or post.author_id != claims.user_id:
            raise Forbidden("You do not have permission to delete this comment")
    deleted = repo.delete(comment_id)
    return BaseResponse(message=f"Deleted {deleted} comment(s)")
