"""Create the database schema and optionally seed an administrator account."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from blog_engine.core.errors import Conflict
from blog_engine.core.logging import configure_logging
from blog_engine.core.security import PasswordHasher
from blog_engine.core.settings import Settings, settings
from blog_engine.db.session import SessionLocal, create_tables, engine
from blog_engine.models import Role, User
from blog_engine.repositories import UserRepository

logger = logging.getLogger(__name__)


def seed_admin(session: Session, config: Settings = settings) -> User | None:
    """Create the configured admin account unless it already exists.

    Returns:
        The admin user, or None when ADMIN_USERNAME/EMAIL/PASSWORD are not all set.
    """
    if not (config.admin_username and config.admin_email and config.admin_password):
        return None

    repo = UserRepository(session)
    existing = repo.get_by_username_or_email(config.admin_username)
    if existing is not None:
        logger.info("Admin account %s already exists", config.admin_username)
        return existing

    hasher = PasswordHasher(cost=config.bcrypt_cost)
    try:
        user = repo.create(
            config.admin_username,
            config.admin_email,
            hasher.hash(config.admin_password),
            role=Role.ADMIN,
        )
    except Conflict:
        logger.warning("Admin email %s is already used by another account", config.admin_email)
        raise
    logger.info("Created admin account %s (id=%d)", user.username, user.id)
    return user


def init_db(bind: Engine | None = None) -> None:
    """Initialize the database by creating all tables and seeding the admin."""
    create_tables(bind or engine)
    with SessionLocal(bind=bind or engine) as session:
        seed_admin(session)


if __name__ == "__main__":
    configure_logging(settings.log_level)
    init_db()
    logger.info("Database initialized.")
