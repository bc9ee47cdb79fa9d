"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, or_, select, update

from blog_engine.core.errors import NotFound
from blog_engine.db.time import utcnow
from blog_engine.models.post import Post
from blog_engine.repositories.base import Repository
from blog_engine.repositories.pagination import Page, paginate

logger = logging.getLogger(__name__)

__all__ = ["PostFilters", "PostRepository"]

EDITABLE_FIELDS = frozenset({"title", "content", "category", "is_published", "cover_url"})
# Columns that may be cleared by sending an explicit null.
NULLABLE_FIELDS = frozenset({"cover_url"})


@dataclass
class PostFilters:
    """Criteria for listing posts; all given filters are combined with AND."""

    page: int = 1
    page_size: int = 10
    category: str | None = None
    # Substring matched against title OR content.
    search_query: str | None = None
    published_only: bool = True
    author_id: int | None = None


class PostRepository(Repository):
    """Post store: CRUD, filtered listing and view counting."""

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        with self._storage_errors():
            return self.session.get(Post, post_id)

    def create(self, fields: Mapping[str, Any], author_id: int) -> Post:
        """Insert a new post authored by `author_id`.

        Args:
            fields: title, content and category (required), is_published and
                cover_url (optional).
            author_id: Id of the authenticated author.
        """
        now = utcnow()
        post = Post(
            title=fields["title"],
            content=fields["content"],
            category=fields["category"],
            author_id=author_id,
            is_published=bool(fields.get("is_published") or False),
            view_count=0,
            cover_url=fields.get("cover_url"),
            created_at=now,
            updated_at=now,
        )
        with self._storage_errors():
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        return post

    def update(self, post_id: int, fields: Mapping[str, Any]) -> Post:
        """Apply a partial update of the editable fields present in `fields`.

        None clears a nullable column such as `cover_url` and is ignored for
        required columns.
        """
        post = self.get_by_id(post_id)
        if post is None:
            raise NotFound(f"Post {post_id} not found")
        for key, value in fields.items():
            if key not in EDITABLE_FIELDS:
                continue
            if value is not None or key in NULLABLE_FIELDS:
                setattr(post, key, value)
        post.updated_at = utcnow()
        with self._storage_errors():
            self.session.commit()
            self.session.refresh(post)
        return post

    def delete(self, post_id: int) -> None:
        """Delete a post; comments and favorites go with it via FK cascades."""
        with self._storage_errors():
            result = self.session.execute(delete(Post).where(Post.id == post_id))
            self.session.commit()
        if result.rowcount == 0:
            raise NotFound(f"Post {post_id} not found")

    def delete_many(self, post_ids: Iterable[int]) -> int:
        """Best-effort batch delete; returns the number of rows actually removed."""
        ids = list(dict.fromkeys(post_ids))
        if not ids:
            return 0
        with self._storage_errors():
            result = self.session.execute(delete(Post).where(Post.id.in_(ids)))
            self.session.commit()
        logger.info("Deleted %d of %d requested posts", result.rowcount, len(ids))
        return int(result.rowcount)

    def increment_view_count(self, post_id: int) -> None:
        """Atomically add one to the post's view counter.

        Raises:
            NotFound: If the post does not exist.
        """
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(view_count=Post.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        with self._storage_errors():
            result = self.session.execute(stmt)
            self.session.commit()
        if result.rowcount == 0:
            raise NotFound(f"Post {post_id} not found")

    def list_paginated(self, filters: PostFilters) -> Page[Post]:
        """Return one page of posts, newest first."""
        stmt = select(Post)
        if filters.category:
            stmt = stmt.where(Post.category == filters.category)
        if filters.search_query:
            pattern = f"%{filters.search_query}%"
            stmt = stmt.where(or_(Post.title.like(pattern), Post.content.like(pattern)))
        if filters.published_only:
            stmt = stmt.where(Post.is_published.is_(True))
        if filters.author_id is not None:
            stmt = stmt.where(Post.author_id == filters.author_id)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())

        with self._storage_errors():
            return paginate(self.session, stmt, filters.page, filters.page_size)
