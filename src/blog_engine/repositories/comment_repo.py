"""Data access for comments and their reply trees."""
from __future__ import annotations

from sqlalchemy import delete, select

from blog_engine.core.errors import NotFound, ValidationFailed
from blog_engine.db.time import utcnow
from blog_engine.models.comment import Comment
from blog_engine.repositories.base import Repository
from blog_engine.repositories.pagination import Page, paginate

__all__ = ["CommentRepository"]


class CommentRepository(Repository):
    """Comment store: CRUD, per-post listing and subtree deletion."""

    def get_by_id(self, comment_id: int) -> Comment | None:
        """Return a comment by identifier."""
        with self._storage_errors():
            return self.session.get(Comment, comment_id)

    def create(
        self,
        content: str,
        post_id: int,
        user_id: int,
        parent_id: int | None = None,
    ) -> Comment:
        """Insert a comment, optionally as a reply to `parent_id`.

        Raises:
            NotFound: If `parent_id` does not reference an existing comment.
            ValidationFailed: If the parent comment belongs to a different post.
        """
        if parent_id is not None:
            parent = self.get_by_id(parent_id)
            if parent is None:
                raise NotFound(f"Parent comment {parent_id} not found")
            if parent.post_id != post_id:
                raise ValidationFailed("Parent comment belongs to a different post")

        comment = Comment(
            content=content,
            post_id=post_id,
            user_id=user_id,
            parent_id=parent_id,
            created_at=utcnow(),
        )
        with self._storage_errors():
            self.session.add(comment)
            self.session.commit()
            self.session.refresh(comment)
        return comment

    def update(self, comment_id: int, content: str) -> Comment:
        """Replace a comment's content; every other field is immutable."""
        comment = self.get_by_id(comment_id)
        if comment is None:
            raise NotFound(f"Comment {comment_id} not found")
        comment.content = content
        with self._storage_errors():
            self.session.commit()
            self.session.refresh(comment)
        return comment

    def _subtree_ids(self, root_id: int) -> list[int]:
        """Collect `root_id` and all of its descendants, breadth first."""
        collected = [root_id]
        frontier = [root_id]
        while frontier:
            children = list(
                self.session.execute(
                    select(Comment.id).where(Comment.parent_id.in_(frontier))
                ).scalars()
            )
            frontier = [cid for cid in children if cid not in collected]
            collected.extend(frontier)
        return collected

    def delete(self, comment_id: int) -> int:
        """Delete a comment together with every reply beneath it.

        Returns:
            Number of comments removed (the comment itself plus descendants).

        Raises:
            NotFound: If the comment does not exist.
        """
        if self.get_by_id(comment_id) is None:
            raise NotFound(f"Comment {comment_id} not found")
        with self._storage_errors():
            ids = self._subtree_ids(comment_id)
            result = self.session.execute(delete(Comment).where(Comment.id.in_(ids)))
            self.session.commit()
        return int(result.rowcount)

    def list_by_post_paginated(self, post_id: int, page: int, page_size: int) -> Page[Comment]:
        """Return one page of a post's comments, newest first."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        with self._storage_errors():
            return paginate(self.session, stmt, page, page_size)
