"""ORM Models — SQLAlchemy declarative models for identities, sessions and messages.

Invariants:
    - All models inherit from Base (db/base.py)
    - No foreign keys: sender/recipient integrity with identities is assumed

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all
"""

from courier.models.identity import Identity  # noqa: F401
from courier.models.session import Session  # noqa: F401
from courier.models.message import Message  # noqa: F401
