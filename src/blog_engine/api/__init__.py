"""HTTP API: routers, request dependencies and the authorization gate."""

from .endpoints import (
    comments_router,
    favorites_router,
    posts_router,
    system_router,
    users_router,
)

__all__ = [
    "comments_router",
    "favorites_router",
    "posts_router",
    "system_router",
    "users_router",
]
