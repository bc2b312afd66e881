"""Password hashing.

bcrypt salts every hash and compares in constant time. The work factor comes
from settings (10 by default); tests build a hasher with work factor 4.
"""

import bcrypt


def _to_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


class PasswordHasher:
    """bcrypt hash/verify with a fixed work factor."""

    def __init__(self, work_factor: int = 10):
        self.work_factor = work_factor
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        """Hash a password. Returns a 60 character "$2b$..." string."""
        salt = bcrypt.gensalt(rounds=self.work_factor)
        return bcrypt.hashpw(_to_bytes(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        Malformed hashes verify as False rather than raising.
        """
        try:
            return bcrypt.checkpw(_to_bytes(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def burn(self, password: str) -> None:
        """Spend the same time as verify() when there is no hash to check.

        Keeps unknown-email logins as slow as wrong-password logins.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("not-a-real-password")
        self.verify(password, self._dummy_hash)
