"""Data access for per-user post favorites."""
from __future__ import annotations

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError

from blog_engine.core.errors import NotFound
from blog_engine.db.time import utcnow
from blog_engine.models.favorite import Favorite
from blog_engine.models.post import Post
from blog_engine.repositories.base import Repository
from blog_engine.repositories.pagination import Page, paginate

__all__ = ["FavoriteRepository"]


class FavoriteRepository(Repository):
    """Favorite store: toggle, existence checks and the user's favorites list."""

    def toggle(self, user_id: int, post_id: int) -> bool:
        """Flip the favorited state of `(user_id, post_id)`.

        Returns:
            True if the post is now favorited, False if the favorite was removed.
        """
        with self._storage_errors():
            removed = self.session.execute(
                delete(Favorite).where(
                    Favorite.user_id == user_id,
                    Favorite.post_id == post_id,
                )
            ).rowcount
            if removed:
                self.session.commit()
                return False

            try:
                with self.session.begin_nested():
                    self.session.add(
                        Favorite(user_id=user_id, post_id=post_id, created_at=utcnow())
                    )
            except IntegrityError as err:
                # A concurrent toggle may have inserted the same pair first; the
                # primary key kept it to a single row and the pair is favorited.
                if not self.is_favorited(user_id, post_id):
                    raise NotFound("User or post not found") from err
            self.session.commit()
            return True

    def is_favorited(self, user_id: int, post_id: int) -> bool:
        """Return True if the user has favorited the post."""
        stmt = select(Favorite.user_id).where(
            Favorite.user_id == user_id,
            Favorite.post_id == post_id,
        )
        with self._storage_errors():
            return self.session.execute(stmt).first() is not None

    def count_for_post(self, post_id: int) -> int:
        """Return how many users have favorited the post."""
        stmt = select(func.count()).select_from(Favorite).where(Favorite.post_id == post_id)
        with self._storage_errors():
            return int(self.session.execute(stmt).scalar_one())

    def list_user_favorites_paginated(
        self,
        user_id: int,
        page: int,
        page_size: int,
        *,
        include_unpublished: bool = False,
    ) -> Page[Post]:
        """Return the user's favorited posts, most recently favorited first.

        Unless `include_unpublished` is set, only published posts and the
        user's own drafts are returned; `total_count` counts the same rows.
        """
        conditions = [Favorite.user_id == user_id]
        if not include_unpublished:
            conditions.append(or_(Post.is_published.is_(True), Post.author_id == user_id))
        stmt = (
            select(Post)
            .join(Favorite, Favorite.post_id == Post.id)
            .where(*conditions)
            .order_by(Favorite.created_at.desc(), Favorite.post_id.desc())
        )
        count_stmt = (
            select(Favorite.post_id)
            .join(Post, Post.id == Favorite.post_id)
            .where(*conditions)
        )
        with self._storage_errors():
            return paginate(self.session, stmt, page, page_size, count_stmt=count_stmt)
