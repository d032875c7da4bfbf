"""Services Layer — login/registration workflow and message query engine.

Invariants:
    - Services depend on repository Protocols, injected by construction
    - Services hold no in-memory state across calls
    - No service performs authorization; the API layer gates calls first
"""
