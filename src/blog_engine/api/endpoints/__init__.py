"""API endpoint modules."""

from .comments import router as comments_router
from .favorites import router as favorites_router
from .posts import router as posts_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "comments_router",
    "favorites_router",
    "posts_router",
    "system_router",
    "users_router",
]
