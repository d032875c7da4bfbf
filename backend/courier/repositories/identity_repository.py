"""Identity Repository — Credential Store half for registered identities."""

from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from courier.core.domain_types import IdentityId
from courier.infrastructure.database import storage_errors
from courier.models.identity import Identity


class IdentityRepository(Protocol):
    async def add(self, username: str, secret_digest: str) -> IdentityId: ...

    async def find(self, username: str, secret_digest: str) -> Identity | None: ...

    async def count(self) -> int: ...


class SqlIdentityRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def add(self, username: str, secret_digest: str) -> IdentityId:
        """Insert and return the store-generated id."""
        identity = Identity(username=username, secret_digest=secret_digest)
        async with storage_errors(self._db, "insert"):
            self._db.add(identity)
            await self._db.flush()
            identity_id = IdentityId(identity.id)
            await self._db.commit()
        return identity_id

    async def find(self, username: str, secret_digest: str) -> Identity | None:
        """First identity matching both username and digest, if any."""
        async with storage_errors(self._db, "query"):
            result = await self._db.execute(
                select(Identity)
                .where(
                    Identity.username == username,
                    Identity.secret_digest == secret_digest,
                )
                .order_by(Identity.id)
                .limit(1),
            )
            return result.scalar_one_or_none()

    async def count(self) -> int:
        async with storage_errors(self._db, "query"):
            result = await self._db.execute(
                select(func.count()).select_from(Identity),
            )
            return result.scalar_one()
