# src/blog_engine/models/role.py
"""Account roles."""

from enum import Enum


class Role(str, Enum):
    """Closed set of roles a user account can hold."""

    USER = "user"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value
