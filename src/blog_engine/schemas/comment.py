"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from blog_engine.schemas.common import BaseResponse

CONTENT_FIELD = Field(..., min_length=1, max_length=1000, description="Comment text (1-1000 characters)")


class CommentBody(BaseModel):
    """Comment payload when the post is given by the URL."""

    content: str = CONTENT_FIELD
    parent_id: int | None = Field(None, ge=1, description="Parent comment for nested replies")


class CommentCreate(CommentBody):
    """Comment payload that names its post explicitly."""

    post_id: int = Field(..., ge=1)


class CommentUpdate(BaseModel):
    """Only the content of a comment can change."""

    content: str = CONTENT_FIELD


class CommentInfo(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    content: str
    post_id: int
    user_id: int
    parent_id: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseResponse):
    """Single comment payload."""

    comment: CommentInfo


class CommentListResponse(BaseResponse):
    """One page of a post's comments."""

    comments: list[CommentInfo]
    total_pages: int
    current_page: int
    total_comments: int
