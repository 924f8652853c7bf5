"""
Security utility tests
"""

from datetime import timedelta

import jwt
import pytest

from shared.utils.security import SecurityUtils


class TestSecurityUtils:
    def test_hash_password(self, security):
        hashed = security.hash_password("secret123")
        assert hashed != "secret123"
        assert security.verify_password("secret123", hashed)
        assert not security.verify_password("wrong", hashed)

    def test_hashes_are_salted(self, security):
        assert security.hash_password("secret123") != security.hash_password("secret123")

    def test_verify_password_with_malformed_hash(self, security):
        assert security.verify_password("secret123", "not-a-bcrypt-hash") is False

    def test_token_roundtrip(self, security):
        token = security.generate_token({"userId": "u1", "email": "a@b.co", "role": "USER"})
        claims = security.verify_token(token)
        assert claims["userId"] == "u1"
        assert claims["exp"] - claims["iat"] == 24 * 60 * 60

    def test_expired_token(self, security):
        token = security.generate_token({"userId": "u1"}, expires_in=timedelta(seconds=-1))
        assert security.verify_token(token) is None

    def test_token_signed_with_other_secret(self, security):
        forged = jwt.encode({"userId": "u1"}, "another-secret-key-with-enough-length-for-hs256", algorithm="HS256")
        assert security.verify_token(forged) is None

    def test_garbage_token(self, security):
        assert security.verify_token("not.a.token") is None

    def test_secret_required(self):
        with pytest.raises(ValueError):
            SecurityUtils("")
