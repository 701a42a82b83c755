"""Unit tests for JWTAuthProvider.

Covers claim extraction and the rejection paths of validate_token:
- missing or empty 'sub' / 'email'
- a subject that is not a UUID
- wrong signing secret
"""

from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def hs256_provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestValidateTokenMissingClaims:
    """validate_token returns None when 'sub' or 'email' is absent."""

    async def test_should_return_none_when_token_has_no_sub_claim(
        self, hs256_provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"email": "user@example.com", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_should_return_none_when_token_has_no_email_claim(
        self, hs256_provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_should_return_none_when_token_has_empty_sub(
        self, hs256_provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"sub": "", "email": "user@example.com", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None


class TestValidateTokenRejections:
    async def test_should_return_none_for_non_uuid_subject(
        self, hs256_provider: JWTAuthProvider
    ):
        token = _make_hs256_token(
            {"sub": "not-a-uuid", "email": "user@example.com", "exp": 9999999999}
        )

        assert await hs256_provider.validate_token(token) is None

    async def test_should_return_none_for_wrong_secret(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": str(uuid4()), "email": "user@example.com", "exp": 9999999999},
            secret="another-secret",
        )

        assert await hs256_provider.validate_token(token) is None

    async def test_should_return_none_for_garbage(self, hs256_provider: JWTAuthProvider):
        assert await hs256_provider.validate_token("not-a-jwt") is None


class TestValidateTokenClaims:
    async def test_should_extract_profile_claims(self, hs256_provider: JWTAuthProvider):
        user_id = uuid4()
        token = _make_hs256_token(
            {
                "sub": str(user_id),
                "email": "budi@example.com",
                "name": "Budi",
                "avatar": "https://gravatar.com/avatar/abc",
                "exp": 9999999999,
            }
        )

        user = await hs256_provider.validate_token(token)

        assert user is not None
        assert user.id == user_id
        assert user.name == "Budi"
        assert user.avatar_url == "https://gravatar.com/avatar/abc"

    async def test_optional_claims_default_to_none(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": str(uuid4()), "email": "user@example.com", "exp": 9999999999}
        )

        user = await hs256_provider.validate_token(token)

        assert user is not None
        assert user.name is None
        assert user.avatar_url is None

    async def test_created_token_round_trips(self, hs256_provider: JWTAuthProvider):
        original = TokenUser(
            id=uuid4(),
            email="user@example.com",
            name="Ana",
            avatar_url="https://gravatar.com/avatar/ana",
        )

        user = await hs256_provider.validate_token(hs256_provider.create_token(original))

        assert user == original
