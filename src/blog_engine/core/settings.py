"""Application settings and configuration.

This module defines all configuration options for the Blog Engine application.
Settings are loaded from environment variables (and an optional `.env` file)
once at import time and treated as an immutable snapshot afterwards.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from blog_engine.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

INSECURE_DEFAULT_SECRET = "default_jwt_secret"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Blog Engine", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./blogdb.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    secret_key: str = Field(default=INSECURE_DEFAULT_SECRET, alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_days: int = Field(default=30, alias="ACCESS_TOKEN_EXPIRE_DAYS")

    # Password hashing work factor (bcrypt log2 rounds)
    bcrypt_cost: int = Field(default=12, ge=4, le=31, alias="BCRYPT_COST")

    # Pagination
    default_page_size: int = Field(default=10, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")

    # Optional bootstrap administrator created by init_db
    admin_username: str | None = Field(default=None, alias="ADMIN_USERNAME")
    admin_email: str | None = Field(default=None, alias="ADMIN_EMAIL")
    admin_password: str | None = Field(default=None, alias="ADMIN_PASSWORD")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        frozen=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Return True when running in a hardened (production) environment."""
        return self.environment.lower() in {"production", "prod"}

    @property
    def uses_default_secret(self) -> bool:
        """Return True when the signing secret was never configured."""
        return self.secret_key == INSECURE_DEFAULT_SECRET

    def ensure_secure(self) -> None:
        """Reject insecure fallbacks when running in production.

        Raises:
            ConfigurationError: If the default signing secret is used in production.
        """
        if not self.uses_default_secret:
            return
        if self.is_production:
            raise ConfigurationError(
                "JWT_SECRET must be set to a non-default value in production"
            )
        logger.warning(
            "JWT_SECRET is not set; using the insecure development default"
        )


settings = Settings()
