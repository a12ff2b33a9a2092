"""
Tests for token issue / verify and password hashing.
"""

import time

import pytest

from auth.password import hash_password, verify_password
from auth.tokens import InvalidTokenError, create_token, verify_token
from config.settings import Settings, config


class TestTokens:
    def test_round_trip(self):
        token = create_token("user-123")
        assert verify_token(token) == "user-123"

    def test_default_lifetime_is_seven_days(self):
        assert Settings.model_fields["jwt_expiry_seconds"].default == 7 * 24 * 3600

    def test_expired_token_rejected(self):
        token = create_token("user-123", now=time.time() - 8 * 24 * 3600)
        with pytest.raises(InvalidTokenError) as exc_info:
            verify_token(token)
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Invalid or expired token"

    def test_tampered_signature_rejected(self):
        token = create_token("user-123")
        payload, sig = token.split(".", 1)
        forged = payload + "." + ("0" if sig[0] != "0" else "1") + sig[1:]
        with pytest.raises(InvalidTokenError):
            verify_token(forged)

    def test_token_from_other_secret_rejected(self, monkeypatch):
        token = create_token("user-123")
        monkeypatch.setattr(config, "jwt_secret", "another-secret")
        with pytest.raises(InvalidTokenError):
            verify_token(token)

    @pytest.mark.parametrize("garbage", ["", "abc", "abc.def", "!!!.sig", "e30=.deadbeef"])
    def test_malformed_tokens_rejected(self, garbage):
        with pytest.raises(InvalidTokenError):
            verify_token(garbage)


class TestPasswords:
    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = hash_password("secret1")
        assert hashed != "secret1"
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_same_password_hashes_differently(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_work_factor_defaults_to_twelve(self):
        assert Settings.model_fields["bcrypt_rounds"].default == 12
        assert hash_password("secret1", rounds=4).startswith("$2b$04$")

    def test_garbage_hash_does_not_raise(self):
        assert verify_password("secret1", "not-a-hash") is False

    def test_passwords_longer_than_72_bytes(self):
        hashed = hash_password("x" * 80)
        assert verify_password("x" * 80, hashed)
        assert verify_password("x" * 72, hashed)
        assert not verify_password("x" * 71, hashed)
