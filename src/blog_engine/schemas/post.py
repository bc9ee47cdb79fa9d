# src/blog_engine/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from blog_engine.schemas.common import BaseResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=255)
    content_markdown: str = Field(..., min_length=1, description="Markdown content")
    category: str = Field(..., min_length=1, max_length=50)
    is_published: bool | None = Field(None, description="Defaults to false (draft)")
    cover_url: str | None = Field(None, max_length=2048)

    def to_fields(self) -> dict[str, object]:
        """Return store-level field names."""
        data = self.model_dump(exclude_unset=True)
        data["content"] = data.pop("content_markdown")
        return data


class PostUpdate(BaseModel):
    """Partial post update; omitted or null fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content_markdown: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1, max_length=50)
    is_published: bool | None = None
    cover_url: str | None = Field(None, max_length=2048)

    def to_fields(self) -> dict[str, object]:
        """Return store-level field names for the fields that were supplied."""
        data = self.model_dump(exclude_unset=True)
        if "content_markdown" in data:
            data["content"] = data.pop("content_markdown")
        return data


class PostInfo(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    content_markdown: str
    category: str
    author_id: int
    is_published: bool
    view_count: int
    cover_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _from_orm_post(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            # The ORM column is `content`; the wire name is `content_markdown`.
            extracted["content_markdown"] = getattr(data, "content", None)
            data = extracted
        return data

    model_config = ConfigDict(from_attributes=True)


class PostDetailResponse(BaseResponse):
    """Single post payload."""

    post: PostInfo


class PostListResponse(BaseResponse):
    """One page of posts."""

    posts: list[PostInfo]
    total_pages: int
    current_page: int
    total_posts: int


class DeletePostsRequest(BaseModel):
    """Batch deletion payload."""

    post_ids: list[int] = Field(..., description="Ids of the posts to delete")
