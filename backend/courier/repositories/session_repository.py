"""Session Repository — Credential Store half for the per-username Session row.

Invariants:
    - add() never creates a second row for a username: the UNIQUE constraint
      rejects it and the rejection surfaces as ConcurrencyError
    - update() persists the token of an existing row in place
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from courier.core.errors import ConcurrencyError, ErrorContext
from courier.infrastructure.database import storage_errors
from courier.models.session import Session


class SessionRepository(Protocol):
    async def find(self, username: str) -> Session | None: ...

    async def add(self, username: str, token: str) -> Session: ...

    async def update(self, session: Session) -> Session: ...


class SqlSessionRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def find(self, username: str) -> Session | None:
        async with storage_errors(self._db, "query"):
            result = await self._db.execute(
                select(Session).where(Session.username == username),
            )
            return result.scalar_one_or_none()

    async def add(self, username: str, token: str) -> Session:
        session = Session(username=username, token=token)
        async with storage_errors(self._db, "insert"):
            try:
                self._db.add(session)
                await self._db.commit()
            except IntegrityError as e:
                await self._db.rollback()
                raise ConcurrencyError(
                    f"Session for '{username}' was created concurrently",
                    ErrorContext(username=username),
                ) from e
            await self._db.refresh(session)
        return session

    async def update(self, session: Session) -> Session:
        async with storage_errors(self._db, "update"):
            self._db.add(session)
            await self._db.commit()
            await self._db.refresh(session)
        return session
