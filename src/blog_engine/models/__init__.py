# src/blog_engine/models/__init__.py
"""SQLAlchemy models for the Blog Engine application."""

from .comment import Comment
from .favorite import Favorite
from .post import Post
from .role import Role
from .user import User

__all__ = [
    "Comment",
    "Favorite",
    "Post",
    "Role",
    "User",
]
