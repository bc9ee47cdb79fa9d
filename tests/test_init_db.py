# tests/test_init_db.py
"""Tests for database bootstrap and admin seeding."""

from blog_engine.core.settings import Settings
from blog_engine.init_db import seed_admin
from blog_engine.models import Role


def _settings(**overrides):
    values = {"JWT_SECRET": "a-real-secret", "BCRYPT_COST": 4}
    values.update(overrides)
    return Settings(**values)


def test_seed_skipped_without_credentials(db_session):
    assert seed_admin(db_session, _settings(ADMIN_USERNAME=None)) is None


def test_seed_creates_admin_once(db_session):
    """Seeding is idempotent and the account can log in with the admin role."""
    config = _settings(ADMIN_USERNAME="root", ADMIN_EMAIL="root@example.com", ADMIN_PASSWORD="changeme")
    admin = seed_admin(db_session, config)
    assert admin is not None
    assert admin.role is Role.ADMIN

    again = seed_admin(db_session, config)
    assert again.id == admin.id
