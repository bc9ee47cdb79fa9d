# src/blog_engine/repositories/__init__.py
"""Stores wrapping database access for each resource."""

from .comment_repo import CommentRepository
from .favorite_repo import FavoriteRepository
from .pagination import Page, paginate
from .post_repo import PostFilters, PostRepository
from .user_repo import UserRepository

__all__ = [
    "CommentRepository",
    "FavoriteRepository",
    "Page",
    "paginate",
    "PostFilters",
    "PostRepository",
    "UserRepository",
]
