"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - IdentityId, SessionId, MessageId wrap store-assigned integers
    - MessageId grows monotonically in insertion order (keyset pagination relies on it)
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

IdentityId = NewType("IdentityId", int)
SessionId = NewType("SessionId", int)
MessageId = NewType("MessageId", int)


# ─── Constants ───────────────────────────────────────────────────

BEARER_PREFIX = "Bearer "
DEFAULT_FIND_LIMIT = 5
