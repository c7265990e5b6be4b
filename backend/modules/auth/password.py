"""
Password hashing and verification.
"""

import bcrypt


class PasswordHasher:
    """
    Hashes and verifies passwords with bcrypt.

    Bcrypt only reads the first 72 bytes of a password; longer inputs are
    truncated consistently on hash and verify.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8")[:72], salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8")[:72], hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
