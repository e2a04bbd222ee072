"""bcrypt password hashing."""

from typing import Optional

import bcrypt

DEFAULT_ROUNDS = 12
# bcrypt only reads the first 72 bytes; newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Hashes and verifies passwords with a self-salting bcrypt scheme.

    Salt and cost factor are embedded in every hash, so nothing besides the
    hash string needs to be stored.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash or over-long password.
            return False

    def burn(self, password: str) -> None:
        """Spend the same work as a real verification for unknown accounts."""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy", bcrypt.gensalt(rounds=self.rounds))
        try:
            bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
        except ValueError:
            # Same outcome as verify() for input bcrypt refuses.
            pass
