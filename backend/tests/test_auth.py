"""
Tests for the credential module and request identity.

Covers:
- bcrypt password hashing and verification
- JWT session token creation and validation
- Bearer header → Identity resolution
"""

from datetime import timedelta
from types import SimpleNamespace

import pytest
from jose import JWTError, jwt

from auth.identity import (
    ANONYMOUS,
    Anonymous,
    Authenticated,
    NotAuthenticated,
    identity_from_header,
    identity_from_token,
    require_authenticated,
)
from auth.dependencies import get_identity
from auth.jwt_service import create_access_token, verify_access_token
from auth.passwords import hash_password, verify_password
from config import settings


ANA = SimpleNamespace(id=7, username="ana", email="a@x.com")


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_verify_correct_password(self):
        assert verify_password("secret123", hash_password("secret123"))

    def test_verify_wrong_password(self):
        assert not verify_password("secret124", hash_password("secret123"))

    def test_verify_malformed_hash(self):
        assert not verify_password("secret123", "not-a-bcrypt-hash")


class TestJWTService:
    """Tests for session token creation and validation."""

    def test_create_access_token_claims(self):
        token = create_access_token(ANA)
        payload = verify_access_token(token)

        assert payload["sub"] == "7"
        assert payload["username"] == "ana"
        assert payload["email"] == "a@x.com"
        assert payload["type"] == "access"
        assert "iat" in payload
        assert "exp" in payload

    def test_default_expiry_is_two_hours(self):
        payload = verify_access_token(create_access_token(ANA))
        assert payload["exp"] - payload["iat"] == settings.JWT_EXPIRATION_MINUTES * 60
        assert settings.JWT_EXPIRATION_MINUTES == 120

    def test_expired_token_rejected(self):
        token = create_access_token(ANA, expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            verify_access_token(token)

    def test_tampered_token_rejected(self):
        token = create_access_token(ANA)
        tampered = token[:-1] + ("x" if token[-1] != "x" else "y")
        with pytest.raises(JWTError):
            verify_access_token(tampered)

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"sub": "7", "username": "ana", "type": "access"},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(JWTError):
            verify_access_token(token)

    def test_non_access_token_rejected(self):
        token = jwt.encode(
            {"sub": "7", "username": "ana", "type": "refresh"},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(JWTError):
            verify_access_token(token)


class TestIdentity:
    def test_valid_bearer_header(self):
        identity = identity_from_header(f"Bearer {create_access_token(ANA)}")
        assert identity == Authenticated(id=7, username="ana", email="a@x.com")
        assert identity.is_authenticated

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic abc", "garbage"])
    def test_missing_or_malformed_header_is_anonymous(self, header):
        identity = identity_from_header(header)
        assert isinstance(identity, Anonymous)
        assert not identity.is_authenticated

    def test_expired_token_is_anonymous(self):
        token = create_access_token(ANA, expires_delta=timedelta(seconds=-1))
        assert identity_from_token(token) is ANONYMOUS

    def test_token_without_username_is_anonymous(self):
        token = jwt.encode(
            {"sub": "7", "type": "access"},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        assert identity_from_token(token) is ANONYMOUS

    def test_require_authenticated(self):
        identity = Authenticated(id=1, username="ana", email="a@x.com")
        assert require_authenticated(identity) is identity

    def test_require_authenticated_rejects_anonymous(self):
        with pytest.raises(NotAuthenticated):
            require_authenticated(ANONYMOUS)

    @pytest.mark.asyncio
    async def test_get_identity_reads_bearer_header(self):
        identity = await get_identity(f"Bearer {create_access_token(ANA)}")
        assert identity == Authenticated(id=7, username="ana", email="a@x.com")

        assert await get_identity(None) is ANONYMOUS
        assert await get_identity(f"Basic {create_access_token(ANA)}") is ANONYMOUS

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_is_unauthenticated(self, async_client, signup):
        token, _ = await signup("ana")
        response = await async_client.post(
            "/graphql",
            json={"query": "{ me { username } }"},
            headers={"Authorization": f"Basic {token}"},
        )
        assert response.json()["errors"][0]["extensions"]["code"] == "UNAUTHENTICATED"

        response = await async_client.post(
            "/graphql",
            json={"query": "{ me { username } }"},
            headers={"Authorization": f"bearer {token}"},
        )
        assert response.json()["data"]["me"]["username"] == "ana"
