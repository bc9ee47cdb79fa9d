"""Password hashing and session token utilities.

Both helpers are frozen value objects built from the settings snapshot at
startup and handed to request handlers through FastAPI dependencies, so the
signing secret and the bcrypt work factor are never mutated after boot.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, ValidationError

from blog_engine.core.errors import CredentialError, InvalidToken, TokenExpired
from blog_engine.core.settings import Settings, settings
from blog_engine.models.role import Role

logger = logging.getLogger(__name__)

BCRYPT_MIN_COST = 4
BCRYPT_MAX_COST = 31
DEFAULT_TOKEN_TTL = timedelta(days=30)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Claims(BaseModel):
    """Identity carried by a session token."""

    sub: str
    username: str
    role: Role
    exp: int

    model_config = ConfigDict(frozen=True)

    @property
    def user_id(self) -> int:
        """Return the numeric user id encoded in `sub`."""
        try:
            return int(self.sub)
        except ValueError as err:
            raise InvalidToken("Token subject is not a valid user id") from err

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def hash_password(plaintext: str, cost: int | None = None) -> str:
    """Hash a password using salted bcrypt.

    Args:
        plaintext: Raw password supplied by the user.
        cost: bcrypt work factor (log2 rounds); defaults to the configured value.

    Raises:
        CredentialError: If the cost is out of range or hashing fails.
    """
    rounds = settings.bcrypt_cost if cost is None else cost
    if not BCRYPT_MIN_COST <= rounds <= BCRYPT_MAX_COST:
        raise CredentialError(
            f"bcrypt cost must be between {BCRYPT_MIN_COST} and {BCRYPT_MAX_COST}, got {rounds}"
        )
    try:
        return pwd_context.handler("bcrypt").using(rounds=rounds).hash(plaintext)
    except (ValueError, TypeError) as err:
        raise CredentialError(f"Password hashing failed: {err}") from err


def verify_password(plaintext: str, hashed: str) -> bool:
    """Return True if `plaintext` matches `hashed`.

    A mismatch returns False; only a malformed stored hash raises.

    Raises:
        CredentialError: If `hashed` is not a recognizable bcrypt hash.
    """
    try:
        return bool(pwd_context.verify(plaintext, hashed))
    except (ValueError, TypeError) as err:
        raise CredentialError(f"Password verification failed: {err}") from err


@dataclass(frozen=True)
class PasswordHasher:
    """Password hashing bound to a fixed work factor."""

    cost: int = 12

    def hash(self, plaintext: str) -> str:
        return hash_password(plaintext, self.cost)

    def verify(self, plaintext: str, hashed: str) -> bool:
        return verify_password(plaintext, hashed)


@dataclass(frozen=True)
class TokenCodec:
    """Issues and verifies HS256-signed session tokens."""

    secret: str
    algorithm: str = "HS256"
    default_ttl: timedelta = DEFAULT_TOKEN_TTL

    def issue_token(
        self,
        subject_id: int | str,
        username: str,
        role: Role | str,
        ttl: timedelta | None = None,
    ) -> str:
        """Encode `{sub, username, role, exp}` into a signed token."""
        expire = datetime.now(UTC) + (ttl if ttl is not None else self.default_ttl)
        to_encode: dict[str, object] = {
            "sub": str(subject_id),
            "username": username,
            "role": Role(role).value,
            "exp": int(expire.timestamp()),
        }
        encoded_jwt: str = jwt.encode(to_encode, self.secret, algorithm=self.algorithm)
        return encoded_jwt

    def verify_token(self, token: str) -> Claims:
        """Check the signature and expiry of `token` and return its claims.

        Raises:
            TokenExpired: If the token's `exp` lies in the past.
            InvalidToken: If the token cannot be decoded, the signature is wrong,
                or the claim set is incomplete.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as err:
            raise TokenExpired() from err
        except JWTError as err:
            logger.debug("JWT decode failed: %s", err)
            raise InvalidToken() from err

        try:
            claims = Claims.model_validate(payload)
        except ValidationError as err:
            raise InvalidToken("Token claims are incomplete or invalid") from err
        if claims.user_id < 1:
            raise InvalidToken("Token subject is not a valid user id")
        return claims


def build_token_codec(config: Settings) -> TokenCodec:
    """Create a token codec from a settings snapshot."""
    return TokenCodec(
        secret=config.secret_key,
        algorithm=config.jwt_algorithm,
        default_ttl=timedelta(days=config.access_token_expire_days),
    )


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    """Return the process-wide token codec."""
    return build_token_codec(settings)


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    """Return the process-wide password hasher."""
    return PasswordHasher(cost=settings.bcrypt_cost)
