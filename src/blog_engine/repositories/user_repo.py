"""Data access for user accounts."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError

from blog_engine.core.errors import Conflict, InvalidArgument, NotFound
from blog_engine.db.time import utcnow
from blog_engine.models.role import Role
from blog_engine.models.user import User
from blog_engine.repositories.base import Repository
from blog_engine.repositories.pagination import Page, paginate

logger = logging.getLogger(__name__)

__all__ = ["UserRepository"]

PROFILE_FIELDS = frozenset({"username", "email"})
ADMIN_FIELDS = PROFILE_FIELDS | {"role"}


def _coerce_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError as err:
        raise InvalidArgument("Role must be 'user' or 'admin'") from err


class UserRepository(Repository):
    """User store: CRUD, lookup by identifier and paginated listing."""

    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by primary key."""
        with self._storage_errors():
            return self.session.get(User, user_id)

    def get_by_username_or_email(self, identifier: str) -> User | None:
        """Return the user whose username or email equals `identifier`."""
        stmt = select(User).where(or_(User.username == identifier, User.email == identifier))
        with self._storage_errors():
            return self.session.execute(stmt).scalars().first()

    def _conflict_message(self, username: str | None, email: str | None, exclude_id: int | None) -> str:
        """Best-effort description of which unique field collided."""
        stmt = select(User.id, User.username, User.email).where(
            or_(User.username == username, User.email == email)
        )
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        rows = self.session.execute(stmt).all()
        if username is not None and any(row.username == username for row in rows):
            return "Username already exists"
        if rows:
            return "Email already exists"
        return "Username or email already exists"

    def _flush_unique(self, username: str | None, email: str | None, exclude_id: int | None = None) -> None:
        try:
            self.session.commit()
        except IntegrityError as err:
            self.session.rollback()
            raise Conflict(self._conflict_message(username, email, exclude_id)) from err

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: Role | str = Role.USER,
    ) -> User:
        """Insert a new user.

        Uniqueness of username and email is enforced by the table constraints; a
        collision (including one that races an advisory pre-check) raises Conflict.

        Raises:
            Conflict: If the username or email is already taken.
            InvalidArgument: If `role` is not a known role.
        """
        now = utcnow()
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            role=_coerce_role(role),
            created_at=now,
            updated_at=now,
        )
        with self._storage_errors():
            self.session.add(user)
            self._flush_unique(username, email)
            self.session.refresh(user)
        return user

    def _apply_update(
        self,
        user_id: int,
        fields: Mapping[str, Any],
        allowed: frozenset[str],
        new_password_hash: str | None,
    ) -> User:
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")

        for key, value in fields.items():
            if key not in allowed or value is None:
                continue
            if key == "role":
                value = _coerce_role(value)
            setattr(user, key, value)
        if new_password_hash is not None:
            user.password_hash = new_password_hash
        user.updated_at = utcnow()

        with self._storage_errors():
            self._flush_unique(fields.get("username"), fields.get("email"), exclude_id=user_id)
            self.session.refresh(user)
        return user

    def update_profile(
        self,
        user_id: int,
        fields: Mapping[str, Any],
        new_password_hash: str | None = None,
    ) -> User:
        """Apply a partial self-service update (username, email, password).

        Absent or None fields are left untouched; `updated_at` always advances.
        """
        return self._apply_update(user_id, fields, PROFILE_FIELDS, new_password_hash)

    def update_as_admin(
        self,
        user_id: int,
        fields: Mapping[str, Any],
        new_password_hash: str | None = None,
    ) -> User:
        """Apply a partial administrative update, which may also change the role.

        Raises:
            InvalidArgument: If `role` is present but not 'user' or 'admin'.
            NotFound: If the user does not exist.
        """
        if fields.get("role") is not None:
            _coerce_role(fields["role"])
        return self._apply_update(user_id, fields, ADMIN_FIELDS, new_password_hash)

    def delete(self, user_id: int) -> None:
        """Delete a single user.

        Raises:
            NotFound: If no user has that id.
        """
        with self._storage_errors():
            result = self.session.execute(delete(User).where(User.id == user_id))
            self.session.commit()
        if result.rowcount == 0:
            raise NotFound(f"User {user_id} not found")

    def delete_many(self, user_ids: Iterable[int]) -> int:
        """Delete every listed user that exists and return the number removed."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return 0
        with self._storage_errors():
            result = self.session.execute(delete(User).where(User.id.in_(ids)))
            self.session.commit()
        logger.info("Deleted %d of %d requested users", result.rowcount, len(ids))
        return int(result.rowcount)

    def list_paginated(self, page: int, page_size: int) -> Page[User]:
        """Return one page of users ordered by id."""
        stmt = select(User).order_by(User.id.asc())
        with self._storage_errors():
            return paginate(self.session, stmt, page, page_size)
