"""Infrastructure Layer — database runtime and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every SQLAlchemy failure leaves this layer as a StorageError
"""
