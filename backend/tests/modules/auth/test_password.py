"""Tests for password hashing."""

from modules.auth.password import PasswordHasher


class TestPasswordHasher:
    def test_hash_is_not_plain_text(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("letmein123")

        assert hashed != "letmein123"
        assert hashed.startswith("$2")

    def test_verify(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("letmein123")

        assert hasher.verify("letmein123", hashed) is True
        assert hasher.verify("letmein124", hashed) is False

    def test_salted(self):
        hasher = PasswordHasher(rounds=4)
        assert hasher.hash("same-password") != hasher.hash("same-password")

    def test_non_bcrypt_hash_does_not_verify(self):
        assert PasswordHasher(rounds=4).verify("anything", "plain-text") is False

    def test_long_passwords_are_truncated_consistently(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("x" * 100)
        assert hasher.verify("x" * 100, hashed) is True
