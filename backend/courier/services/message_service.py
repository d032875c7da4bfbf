"""Message Service — create, fetch and page through a sender's messages.

Invariants:
    - find() with no limit returns at most DEFAULT_FIND_LIMIT (5) messages
    - find() returns [] rather than raising when nothing matches
    - get() on an absent id raises NotFoundError, never StorageError
"""

import logging

from courier.core.domain_types import DEFAULT_FIND_LIMIT, MessageId
from courier.core.errors import ErrorContext, NotFoundError
from courier.models.message import Message
from courier.repositories.message_repository import MessageRepository

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, messages: MessageRepository):
        self._messages = messages

    async def create(self, sender: int, recipient: int, body: str) -> MessageId:
        message_id = await self._messages.add(sender, recipient, body)
        logger.info(
            "Message stored",
            extra={"identity_id": sender, "message_id": message_id},
        )
        return message_id

    async def get(self, message_id: int) -> Message:
        message = await self._messages.get(message_id)
        if message is None:
            raise NotFoundError(
                "Message", str(message_id), ErrorContext(message_id=message_id),
            )
        return message

    async def find(
        self, from_message_id: int, sender: int, limit: int | None = None,
    ) -> list[Message]:
        """Messages from `sender` with id >= from_message_id, newest first."""
        if limit is None:
            limit = DEFAULT_FIND_LIMIT
        return await self._messages.find(from_message_id, sender, limit)
