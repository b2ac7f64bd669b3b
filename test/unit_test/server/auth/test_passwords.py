"""Unit tests for password hashing."""

import hashlib

import pytest

from promptframe_ai.server.auth.passwords import hash_password, verify_password


class TestPasswords:
    def test_hash_format(self):
        stored = hash_password("s3cret")
        hashed, salt = stored.split(".")
        assert len(hashed) == 128
        assert len(salt) == 32

    def test_salts_differ(self):
        assert hash_password("s3cret") != hash_password("s3cret")

    def test_verify(self):
        stored = hash_password("s3cret")
        assert verify_password("s3cret", stored) is True
        assert verify_password("S3cret", stored) is False

    def test_existing_hash_format_is_accepted(self):
        salt = "0123456789abcdef0123456789abcdef"
        digest = hashlib.scrypt(b"password123", salt=salt.encode(), n=16384, r=8, p=1, dklen=64).hex()
        assert verify_password("password123", f"{digest}.{salt}") is True

    @pytest.mark.parametrize("stored", ["", "nodot", ".salt", "abc.", "zz-not-hex.salt"])
    def test_malformed_stored_value_never_matches(self, stored):
        assert verify_password("anything", stored) is False
