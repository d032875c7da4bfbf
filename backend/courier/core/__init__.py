"""Core Layer — pure domain logic, no DB, no async.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Token signing and password hashing are deterministic given their inputs
      (secret, clock, plaintext)
"""
