"""Message ORM — a short text sent from one identity to another.

Invariants:
    - Immutable once created: no update or delete path
    - id assigned by the store in insertion order; "most recent first" and
      "since id" queries order on it
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from courier.db.base import Base


class Message(Base):
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    recipient: Mapped[int] = mapped_column(Integer, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
