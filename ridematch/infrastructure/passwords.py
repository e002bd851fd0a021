"""
Salted password hashing backed by ``bcrypt``.

bcrypt only looks at the first 72 bytes of its input, and recent
releases refuse longer input outright.  Passwords are therefore reduced
to a fixed-size base64 SHA-256 digest first, so every password of any
length (the empty one included) is accepted and fully significant.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt

from ridematch.domain.errors import InvalidPassword


def _prehash(password: str) -> bytes:
    # raises UnicodeEncodeError for lone surrogates (e.g. undecodable stdin bytes)
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Return a salted hash for *password*, or raise ``InvalidPassword``."""
        try:
            prehashed = _prehash(password)
        except UnicodeEncodeError:
            raise InvalidPassword("Password contains characters that cannot be encoded") from None
        return bcrypt.hashpw(prehashed, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            prehashed = _prehash(password)
        except UnicodeEncodeError:
            return False
        return bcrypt.checkpw(prehashed, password_hash.encode("ascii"))
