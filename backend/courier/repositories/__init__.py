"""Repository Layer — narrow storage capabilities used by the services.

Invariants:
    - Each repository is a typing.Protocol plus one SQLAlchemy implementation
    - Services depend on the Protocol; tests substitute in-memory fakes
    - SQLAlchemy failures leave a repository as StorageError (never raw)
"""
