"""Unit tests for JWTAuthProvider."""

from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


def _make_token(payload: dict, secret: str = "test-secret") -> str:
    return jose_jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestRoundTrip:
    async def test_created_token_validates(self, provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="a@example.com", display_name="Ann", role="admin")

        result = await provider.validate_token(provider.create_token(user))

        assert result == user

    async def test_name_is_optional(self, provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="a@example.com")

        result = await provider.validate_token(provider.create_token(user))

        assert result is not None
        assert result.display_name is None


class TestRejectedTokens:
    async def test_expired_token(self):
        user = TokenUser(id=uuid4(), email="a@example.com")
        expired = JWTAuthProvider(secret_key="test-secret", expire_minutes=-1).create_token(user)

        assert await JWTAuthProvider(secret_key="test-secret").validate_token(expired) is None

    async def test_wrong_secret(self, provider: JWTAuthProvider):
        token = _make_token({"sub": str(uuid4()), "email": "a@example.com"}, secret="other")

        assert await provider.validate_token(token) is None

    async def test_missing_sub(self, provider: JWTAuthProvider):
        token = _make_token({"email": "a@example.com", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_missing_email(self, provider: JWTAuthProvider):
        token = _make_token({"sub": str(uuid4()), "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_sub_that_is_not_a_uuid(self, provider: JWTAuthProvider):
        token = _make_token({"sub": "42", "email": "a@example.com", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_garbage(self, provider: JWTAuthProvider):
        assert await provider.validate_token("not-a-jwt") is None
