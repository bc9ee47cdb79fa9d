# tests/test_security.py
"""Tests for password hashing and session token handling."""

from datetime import timedelta

import pytest
from jose import jwt

from blog_engine.core.errors import CredentialError, InvalidToken, TokenExpired, Unauthorized
from blog_engine.core.security import PasswordHasher, TokenCodec, hash_password, verify_password
from blog_engine.models import Role

SECRET = "unit-test-secret"


class TestPasswordHashing:
    """bcrypt hashing via passlib."""

    def test_hash_and_verify(self):
        """A hash verifies against its own password only."""
        hashed = hash_password("secret1", cost=4)
        assert hashed != "secret1"
        assert verify_password("secret1", hashed) is True
        assert verify_password("secret2", hashed) is False

    def test_hashes_are_salted(self):
        """Hashing the same password twice yields different hashes."""
        assert hash_password("secret1", cost=4) != hash_password("secret1", cost=4)

    @pytest.mark.parametrize("cost", [3, 32])
    def test_cost_out_of_range(self, cost):
        """Work factors outside 4..31 are rejected."""
        with pytest.raises(CredentialError):
            hash_password("secret1", cost=cost)

    def test_malformed_hash(self):
        """A stored value that is not a bcrypt hash raises instead of returning False."""
        with pytest.raises(CredentialError):
            verify_password("secret1", "not-a-hash")

    def test_hasher_uses_its_cost(self):
        """The frozen hasher embeds its work factor in the hash."""
        hashed = PasswordHasher(cost=5).hash("secret1")
        assert hashed.startswith("$2b$05$")
        assert PasswordHasher(cost=5).verify("secret1", hashed)


class TestTokenCodec:
    """HS256 token issue and verification."""

    def test_round_trip_claims(self):
        """Issued tokens verify back to the same identity."""
        codec = TokenCodec(secret=SECRET)
        claims = codec.verify_token(codec.issue_token(7, "alice", Role.ADMIN))
        assert claims.user_id == 7
        assert claims.sub == "7"
        assert claims.username == "alice"
        assert claims.role is Role.ADMIN
        assert claims.is_admin

    def test_expired_token(self):
        """A token past its expiry raises TokenExpired."""
        codec = TokenCodec(secret=SECRET)
        token = codec.issue_token(1, "alice", "user", ttl=timedelta(seconds=-10))
        with pytest.raises(TokenExpired):
            codec.verify_token(token)

    def test_wrong_secret(self):
        """A token signed with another secret is invalid."""
        token = TokenCodec(secret="other").issue_token(1, "alice", "user")
        with pytest.raises(InvalidToken):
            TokenCodec(secret=SECRET).verify_token(token)

    def test_garbage_token(self):
        """Undecodable input is invalid, not a server error."""
        with pytest.raises(InvalidToken):
            TokenCodec(secret=SECRET).verify_token("not.a.jwt")

    def test_missing_claims(self):
        """A correctly signed token without the role claim is invalid."""
        token = jwt.encode({"sub": "1", "username": "alice", "exp": 4102444800}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidToken):
            TokenCodec(secret=SECRET).verify_token(token)

    def test_unknown_role(self):
        """Roles outside the closed set are rejected at decode time."""
        token = jwt.encode(
            {"sub": "1", "username": "alice", "role": "root", "exp": 4102444800},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            TokenCodec(secret=SECRET).verify_token(token)

    def test_non_numeric_subject(self):
        """The subject must be a positive integer user id."""
        token = jwt.encode(
            {"sub": "abc", "username": "alice", "role": "user", "exp": 4102444800},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            TokenCodec(secret=SECRET).verify_token(token)

    def test_token_errors_are_unauthorized(self):
        """Both token failures map to HTTP 401."""
        assert issubclass(TokenExpired, Unauthorized)
        assert issubclass(InvalidToken, Unauthorized)
        assert TokenExpired.status_code == InvalidToken.status_code == 401
