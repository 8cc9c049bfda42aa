"""Unit tests for JWT issuing and verification."""

import uuid
from datetime import timedelta

import pytest
from jose import jwt

from src.kernel.identity.jwt import JWTManager


@pytest.fixture
def manager() -> JWTManager:
    return JWTManager(
        access_secret="unit-access-secret",
        refresh_secret="unit-refresh-secret",
        algorithm="HS256",
        access_token_expire_seconds=15 * 60,
        refresh_token_expire_seconds=7 * 24 * 3600,
    )


class TestTokenIssuing:
    """Tests for token creation."""

    def test_access_token_claims(self, manager: JWTManager):
        user_id = uuid.uuid4()
        token, expires_at = manager.create_access_token(user_id, "a@x.com")

        claims = jwt.get_unverified_claims(token)
        assert claims["sub"] == str(user_id)
        assert claims["email"] == "a@x.com"
        assert claims["type"] == "access"
        assert claims["exp"] - claims["iat"] == 15 * 60
        assert claims["exp"] == int(expires_at.timestamp())

    def test_refresh_token_claims(self, manager: JWTManager):
        user_id = uuid.uuid4()
        token, _ = manager.create_refresh_token(user_id)

        claims = jwt.get_unverified_claims(token)
        assert claims["sub"] == str(user_id)
        assert claims["type"] == "refresh"
        assert "email" not in claims
        assert claims["exp"] - claims["iat"] == 7 * 24 * 3600

    def test_token_pair(self, manager: JWTManager):
        user_id = uuid.uuid4()
        pair = manager.create_token_pair(user_id, "a@x.com")

        assert pair.token_type == "bearer"
        assert pair.expires_in == 15 * 60
        assert pair.access_token != pair.refresh_token

        access = jwt.get_unverified_claims(pair.access_token)
        refresh = jwt.get_unverified_claims(pair.refresh_token)
        assert access["exp"] - access["iat"] == 15 * 60
        assert refresh["exp"] - refresh["iat"] == 7 * 24 * 3600

    def test_refresh_token_signed_with_refresh_secret(self, manager: JWTManager):
        token, _ = manager.create_refresh_token(uuid.uuid4())

        assert jwt.decode(token, "unit-refresh-secret", algorithms=["HS256"])["type"] == "refresh"

    def test_explicit_zero_ttl_not_replaced_by_settings(self):
        manager = JWTManager(
            access_secret="unit-access-secret",
            refresh_secret="unit-refresh-secret",
            access_token_expire_seconds=0,
            refresh_token_expire_seconds=0,
        )
        assert manager.access_token_expire_seconds == 0
        assert manager.refresh_token_expire_seconds == 0

    def test_defaults_come_from_settings(self):
        manager = JWTManager()
        assert manager.access_token_expire_seconds == 15 * 60
        assert manager.refresh_token_expire_seconds == 7 * 24 * 3600
        assert manager.access_secret == "test-access-secret"


class TestTokenVerification:
    """Tests for token verification."""

    def test_verify_access_token(self, manager: JWTManager):
        user_id = uuid.uuid4()
        token, _ = manager.create_access_token(user_id, "a@x.com")

        payload = manager.verify_access_token(token)
        assert payload is not None
        assert payload.sub == str(user_id)
        assert payload.email == "a@x.com"

    def test_verify_refresh_token(self, manager: JWTManager):
        user_id = uuid.uuid4()
        token, _ = manager.create_refresh_token(user_id)

        payload = manager.verify_refresh_token(token)
        assert payload is not None
        assert payload.sub == str(user_id)

    def test_access_token_rejected_as_refresh(self, manager: JWTManager):
        token, _ = manager.create_access_token(uuid.uuid4(), "a@x.com")
        assert manager.verify_refresh_token(token) is None

    def test_refresh_token_rejected_as_access(self, manager: JWTManager):
        token, _ = manager.create_refresh_token(uuid.uuid4())
        assert manager.verify_access_token(token) is None

    def test_wrong_type_with_right_secret_rejected(self, manager: JWTManager):
        """A token signed with the refresh secret but typed 'access' is refused."""
        forged = jwt.encode(
            {"sub": str(uuid.uuid4()), "type": "access", "iat": 0, "exp": 2**31},
            "unit-refresh-secret",
            algorithm="HS256",
        )
        assert manager.verify_refresh_token(forged) is None

    def test_expired_tokens_rejected(self, manager: JWTManager):
        user_id = uuid.uuid4()
        access, _ = manager.create_access_token(user_id, "a@x.com", expires_delta=timedelta(seconds=-10))
        refresh, _ = manager.create_refresh_token(user_id, expires_delta=timedelta(seconds=-10))

        assert manager.verify_access_token(access) is None
        assert manager.verify_refresh_token(refresh) is None

    def test_tampered_token_rejected(self, manager: JWTManager):
        token, _ = manager.create_refresh_token(uuid.uuid4())
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        assert manager.verify_refresh_token(tampered) is None

    def test_token_from_other_secret_rejected(self, manager: JWTManager):
        other = JWTManager(access_secret="x", refresh_secret="y")
        token, _ = other.create_refresh_token(uuid.uuid4())

        assert manager.verify_refresh_token(token) is None

    def test_garbage_rejected(self, manager: JWTManager):
        assert manager.verify_access_token("not.a.jwt") is None
        assert manager.verify_refresh_token("") is None
