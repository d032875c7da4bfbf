"""Message Repository — Message Store: insert, get by id, sender range query.

Invariants:
    - add() returns the id generated by the store for this very insert
    - find() is keyset pagination: id >= from_id AND sender == sender,
      ORDER BY id DESC, LIMIT limit
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courier.core.domain_types import MessageId
from courier.infrastructure.database import storage_errors
from courier.models.message import Message


class MessageRepository(Protocol):
    async def add(self, sender: int, recipient: int, body: str) -> MessageId: ...

    async def get(self, message_id: int) -> Message | None: ...

    async def find(self, from_id: int, sender: int, limit: int) -> list[Message]: ...


class SqlMessageRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def add(self, sender: int, recipient: int, body: str) -> MessageId:
        message = Message(sender=sender, recipient=recipient, body=body)
        async with storage_errors(self._db, "insert"):
            self._db.add(message)
            await self._db.flush()
            message_id = MessageId(message.id)
            await self._db.commit()
        return message_id

    async def get(self, message_id: int) -> Message | None:
        async with storage_errors(self._db, "query"):
            return await self._db.get(Message, message_id)

    async def find(self, from_id: int, sender: int, limit: int) -> list[Message]:
        async with storage_errors(self._db, "query"):
            result = await self._db.execute(
                select(Message)
                .where(Message.id >= from_id, Message.sender == sender)
                .order_by(Message.id.desc())
                .limit(limit),
            )
            return list(result.scalars().all())
