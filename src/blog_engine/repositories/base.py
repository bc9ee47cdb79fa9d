"""Shared plumbing for the SQLAlchemy-backed stores."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog_engine.core.errors import Conflict, StorageError

logger = logging.getLogger(__name__)


class Repository:
    """Thin wrapper around a database session."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @contextmanager
    def _storage_errors(self, conflict_message: str | None = None) -> Iterator[None]:
        """Translate driver failures into domain errors, rolling back the session.

        Args:
            conflict_message: Message used when a uniqueness constraint fires.
        """
        try:
            yield
        except IntegrityError as err:
            self.session.rollback()
            raise Conflict(conflict_message) from err
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.error("Database operation failed: %s", err)
            raise StorageError(str(err)) from err
