"""
storehub.auth.passwords

Password hashing with bcrypt.

Responsibilities:
- Produce self-contained salted hashes (`$2b$<cost>$<salt><digest>`).
- Verify plaintext against a stored hash without raising on malformed input.
"""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes; truncate explicitly so hash and
# verify agree across bcrypt releases.
_BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """
    One-way salted hash + verify.

    The cost factor is fixed at construction; a fresh salt is drawn on every
    `hash()` call, so the same plaintext never hashes to the same string twice.
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        # Built eagerly so the first unknown-email login costs one checkpw like every other.
        self._dummy_hash = bcrypt.hashpw(b"storehub-dummy", bcrypt.gensalt(rounds=rounds))

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plaintext), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Malformed or foreign hash formats are a non-match, not an error.
            return False

    def dummy_verify(self, plaintext: str) -> bool:
        """
        Spend one verification worth of CPU and return False.

        Used when no user matched so the unknown-email path costs the same as
        the wrong-password path.
        """

        bcrypt.checkpw(_encode(plaintext), self._dummy_hash)
        return False


# --- Module Notes -----------------------------------------------------------
# bcrypt.checkpw compares digests in constant time.
