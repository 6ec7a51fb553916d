"""Unit tests for password hashing and JWT tokens."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import JWTError

from moneytree.core.security import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Argon2 hashing round trips."""

    def test_hash_is_argon2(self):
        hashed = hash_password("MySecurePassword123!")

        assert hashed != "MySecurePassword123!"
        assert hashed.startswith("$argon2")

    def test_verify_password(self):
        hashed = hash_password("MySecurePassword123!")

        assert verify_password("MySecurePassword123!", hashed) is True
        assert verify_password("WrongPassword456!", hashed) is False

    def test_hashes_are_salted(self):
        """Hashing the same password twice gives different hashes."""
        first = hash_password("same-password")
        second = hash_password("same-password")

        assert first != second
        assert verify_password("same-password", first)
        assert verify_password("same-password", second)


class TestJWTTokens:
    """Access and refresh token creation and validation."""

    def test_access_token_claims(self):
        user_id = uuid4()

        payload = decode_token(create_access_token(user_id))

        assert payload["sub"] == str(user_id)
        assert payload["type"] == ACCESS_TOKEN
        assert "exp" in payload

    def test_access_token_custom_expiry(self):
        user_id = uuid4()
        token = create_access_token(user_id, timedelta(hours=2))

        assert decode_token(token)["sub"] == str(user_id)

    def test_expired_access_token(self):
        token = create_access_token(uuid4(), timedelta(seconds=-5))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_refresh_token_claims(self):
        user_id = uuid4()

        payload = decode_token(create_refresh_token(user_id), REFRESH_TOKEN)

        assert payload["sub"] == str(user_id)
        assert payload["type"] == REFRESH_TOKEN

    def test_refresh_token_rejected_as_access_token(self):
        """A refresh token cannot authenticate a request."""
        token = create_refresh_token(uuid4())

        with pytest.raises(JWTError):
            decode_token(token, ACCESS_TOKEN)

    def test_access_token_rejected_as_refresh_token(self):
        token = create_access_token(uuid4())

        with pytest.raises(JWTError):
            decode_token(token, REFRESH_TOKEN)

    def test_invalid_token(self):
        with pytest.raises(JWTError):
            decode_token("invalid.token.string")

    def test_tampered_token(self):
        token = create_access_token(uuid4())

        with pytest.raises(JWTError):
            decode_token(token[:-5] + "XXXXX")

    def test_get_user_id_from_token(self):
        user_id = uuid4()

        assert get_user_id_from_token(create_access_token(user_id)) == user_id
        assert get_user_id_from_token(create_refresh_token(user_id), REFRESH_TOKEN) == user_id
