"""Session ORM — the single current bearer-token record for a username.

Invariants:
    - At most one row per username (UNIQUE constraint on username)
    - Only the login workflow inserts or updates rows; nothing deletes them
    - token is bookkeeping for "current token"; authorization never reads it
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from courier.db.base import Base


class Session(Base):
    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    token: Mapped[str] = mapped_column(Text, nullable=False)
