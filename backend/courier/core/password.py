"""Password Hasher — maps a plaintext secret to a stable digest string.

Invariants:
    - Same plaintext always yields the same digest (identity lookup matches on it)
    - Digest is SHA-256 rendered as UPPERCASE hex, 64 characters
"""

import hashlib
from typing import Protocol


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...


class Sha256Hasher:
    """SHA-256 over the UTF-8 bytes of the secret."""

    def hash(self, plaintext: str) -> str:
        return hashlib.sha256(plaintext.encode("utf-8")).hexdigest().upper()
