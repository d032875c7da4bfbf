"""Identity ORM — a registered account (username + hashed secret).

Invariants:
    - Created once at registration, never updated or deleted
    - username is indexed, NOT unique: the application layer assumes uniqueness
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from courier.db.base import Base


class Identity(Base):
    __tablename__ = "identities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    secret_digest: Mapped[str] = mapped_column(String(64), nullable=False)
