"""
catalog_api.auth.passwords

Password hashing primitive.

Responsibilities:
- Hash new passwords with a per-hash random salt (bcrypt).
- Verify a presented password against a stored hash.
- Provide a fixed dummy hash so unknown usernames cost the same as known ones.
"""

from __future__ import annotations

import bcrypt

# bcrypt only consumes the first 72 bytes of input; newer releases raise
# instead of truncating, so truncate the same way on hash and verify.
_BCRYPT_MAX_BYTES = 72


def _encode(secret: str) -> bytes:
    return secret.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    def __init__(self, *, rounds: int = 12) -> None:
        self._rounds = rounds
        self._dummy_hash: str | None = None

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, secret: str) -> str:
        return bcrypt.hashpw(_encode(secret), bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, secret: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(secret), hashed.encode("ascii"))
        except ValueError:
            # Malformed or non-bcrypt stored value: treat as a mismatch.
            return False

    @property
    def dummy_hash(self) -> str:
        # Computed lazily at the configured cost so timing matches real users.
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("catalog-api-timing-equalizer")
        return self._dummy_hash
