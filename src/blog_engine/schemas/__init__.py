"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentInfo, CommentUpdate
from .common import BaseResponse, ErrorResponse, IdResponse
from .favorite import FavoriteListResponse, ToggleFavoriteRequest
from .post import PostCreate, PostInfo, PostUpdate
from .user import RegisterRequest, UserInfo

__all__ = [
    "BaseResponse", "ErrorResponse", "IdResponse",
    "CommentCreate", "CommentInfo", "CommentUpdate",
    "FavoriteListResponse", "ToggleFavoriteRequest",
    "PostCreate", "PostInfo", "PostUpdate",
    "RegisterRequest", "UserInfo",
]
