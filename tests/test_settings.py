# tests/test_settings.py
"""Tests for configuration loading and the production secret check."""

import pytest
from pydantic import ValidationError

from blog_engine.core.errors import ConfigurationError
from blog_engine.core.settings import INSECURE_DEFAULT_SECRET, Settings


def test_defaults_are_sane():
    """Unset options fall back to their documented defaults."""
    config = Settings(JWT_SECRET=INSECURE_DEFAULT_SECRET, BCRYPT_COST=12, ENVIRONMENT="development")
    assert config.jwt_algorithm == "HS256"
    assert config.access_token_expire_days == 30
    assert config.bcrypt_cost == 12
    assert config.default_page_size == 10


def test_production_rejects_default_secret():
    """Production refuses to start with the built-in signing secret."""
    config = Settings(ENVIRONMENT="production", JWT_SECRET=INSECURE_DEFAULT_SECRET)
    with pytest.raises(ConfigurationError):
        config.ensure_secure()


def test_development_allows_default_secret():
    """Development only warns about the built-in signing secret."""
    config = Settings(ENVIRONMENT="development", JWT_SECRET=INSECURE_DEFAULT_SECRET)
    config.ensure_secure()
    assert config.uses_default_secret


def test_production_with_custom_secret():
    """A configured secret passes the production check."""
    config = Settings(ENVIRONMENT="production", JWT_SECRET="a-real-secret")
    config.ensure_secure()
    assert config.is_production
    assert not config.uses_default_secret


def test_settings_are_frozen():
    """The settings snapshot cannot be mutated after load."""
    config = Settings(JWT_SECRET="a-real-secret")
    with pytest.raises(ValidationError):
        config.secret_key = "changed"  # type: ignore[misc]


@pytest.mark.parametrize("cost", [3, 32])
def test_bcrypt_cost_out_of_range_is_rejected(cost):
    """An unusable bcrypt work factor fails at load time rather than on first login."""
    with pytest.raises(ValidationError):
        Settings(JWT_SECRET="a-real-secret", BCRYPT_COST=cost)
