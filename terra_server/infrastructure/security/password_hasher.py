# terra_server/infrastructure/security/password_hasher.py

import base64
import hashlib
import hmac
import os


class PasswordHasher:
    """PBKDF2-SHA256 hashes encoded as ``algo$iterations$salt$digest``."""

    DEFAULT_ALGO = "pbkdf2_sha256"
    DEFAULT_ITERATIONS = 600_000
    SALT_BYTES = 16

    def __init__(self, *, iterations: int | None = None) -> None:
        self._iterations = iterations or self.DEFAULT_ITERATIONS
        self._dummy_hash: str | None = None

    def hash_password(self, password: str) -> str:
        salt = os.urandom(self.SALT_BYTES)
        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self._iterations)

        password_salt = base64.b64encode(salt).decode("utf-8")
        password_hash = base64.b64encode(dk).decode("utf-8")
        return f"{self.DEFAULT_ALGO}${self._iterations}${password_salt}${password_hash}"

    def verify_password(self, password: str, stored: str | None) -> bool:
        if not stored:
            return False

        try:
            algo, iterations, password_salt, password_hash = stored.split("$")
            if algo != self.DEFAULT_ALGO:
                return False
            salt = base64.b64decode(password_salt.encode("utf-8"), validate=True)
            expected = base64.b64decode(password_hash.encode("utf-8"), validate=True)
            rounds = int(iterations)
        except (ValueError, TypeError):
            # binascii.Error is a ValueError
            return False

        if rounds <= 0 or not salt or not expected:
            return False

        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
        return hmac.compare_digest(dk, expected)

    def verify_dummy(self, password: str) -> bool:
        """Runs a full verify against a throwaway hash; always False."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash_password(base64.b64encode(os.urandom(self.SALT_BYTES)).decode("utf-8"))
        self.verify_password(password, self._dummy_hash)
        return False
