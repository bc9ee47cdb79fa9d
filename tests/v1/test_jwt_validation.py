# tests/v1/test_jwt_validation.py
"""Tests for bearer token handling on protected routes."""

from datetime import timedelta

from fastapi import status
from jose import jwt

from blog_engine.core.security import TokenCodec


class TestBearerTokens:
    """Token validation edge cases."""

    def test_missing_header(self, client):
        response = client.get("/api/user/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["success"] is False

    def test_without_bearer_prefix(self, client):
        response = client.get("/api/user/me", headers={"Authorization": "InvalidToken123"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_malformed_token(self, client):
        response = client.get("/api/user/me", headers={"Authorization": "Bearer not.a.valid.jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid token"

    def test_expired_token(self, client, test_user, codec):
        token = codec.issue_token(test_user.id, test_user.username, test_user.role, ttl=timedelta(seconds=-5))
        response = client.get("/api/user/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Token has expired"

    def test_wrong_secret(self, client, test_user):
        token = TokenCodec(secret="wrong_secret_key").issue_token(test_user.id, test_user.username, "user")
        response = client.get("/api/user/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_algorithm(self, client, test_user, codec):
        token = jwt.encode(
            {"sub": str(test_user.id), "username": test_user.username, "role": "user", "exp": 4102444800},
            codec.secret,
            algorithm="HS512",
        )
        response = client.get("/api/user/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_token_on_public_route(self, client):
        """A bad token is rejected even where an anonymous caller would be allowed."""
        response = client.get("/api/post", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_admin_route_with_user_token(self, client, auth_token):
        response = client.get("/api/user", headers=auth_token)
        assert response.status_code == status.HTTP_403_FORBIDDEN
