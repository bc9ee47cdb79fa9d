# src/blog_engine/models/favorite.py
"""Per-user post favorites."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from blog_engine.db.session import Base
from blog_engine.db.time import utcnow


class Favorite(Base):
    """A user's bookmark on a post.

    The row's existence is the favorited state; there is no surrogate id.
    """

    __tablename__ = "favorites"
    __table_args__ = (Index("ix_favorites_post_id", "post_id"),)

    # Composite primary key prevents duplicate favorites from the same user.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
