"""Tests for identity token issuance and verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from taskflow.auth.jwt import (
    TokenExpiredError,
    TokenIdentity,
    TokenMalformedError,
    create_access_token,
    verify_token,
)
from taskflow.config import get_settings


def _sign(payload: dict, secret: str | None = None) -> str:
    settings = get_settings()
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


class TestAccessToken:
    def test_create_and_verify(self):
        token = create_access_token(user_id=7, username="alice")
        assert verify_token(token) == TokenIdentity(user_id=7, username="alice")

    def test_claims(self):
        token = create_access_token(user_id=7, username="alice")
        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["userId"] == 7
        assert payload["username"] == "alice"
        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600

    def test_hs256_header(self):
        token = create_access_token(user_id=1, username="alice")
        assert jwt.get_unverified_header(token)["alg"] == "HS256"


class TestVerification:
    def test_expired_token(self):
        now = datetime.now(timezone.utc)
        token = _sign({
            "userId": 1,
            "username": "alice",
            "iat": now - timedelta(days=8),
            "exp": now - timedelta(days=1),
        })
        with pytest.raises(TokenExpiredError):
            verify_token(token)

    def test_garbage_is_malformed(self):
        with pytest.raises(TokenMalformedError):
            verify_token("garbage")

    def test_wrong_secret_is_malformed(self):
        now = datetime.now(timezone.utc)
        token = _sign({"userId": 1, "username": "alice", "exp": now + timedelta(days=1)}, secret="other")
        with pytest.raises(TokenMalformedError):
            verify_token(token)

    def test_missing_user_id_is_malformed(self):
        now = datetime.now(timezone.utc)
        token = _sign({"username": "alice", "exp": now + timedelta(days=1)})
        with pytest.raises(TokenMalformedError, match="payload"):
            verify_token(token)

    def test_missing_exp_is_malformed(self):
        token = _sign({"userId": 1, "username": "alice"})
        with pytest.raises(TokenMalformedError):
            verify_token(token)

    def test_tampered_payload_rejected(self):
        token = create_access_token(user_id=1, username="alice")
        header, _payload, signature = token.split(".")
        forged = create_access_token(user_id=2, username="mallory").split(".")[1]
        with pytest.raises(TokenMalformedError):
            verify_token(f"{header}.{forged}.{signature}")
