"""Service test fixtures — in-memory fakes for the repository Protocols.

Invariants:
    - Fakes assign ids 1, 2, 3... in insertion order, like the real store
    - FakeSessionRepository enforces one row per username (ConcurrencyError)
    - RacingSessionRepository hides an existing row from the first find(),
      reproducing two logins that both saw "no session yet"
"""

import pytest

from courier.core.domain_types import IdentityId, MessageId
from courier.core.errors import ConcurrencyError
from courier.core.password import Sha256Hasher
from courier.models.identity import Identity
from courier.models.message import Message
from courier.models.session import Session
from courier.services.message_service import MessageService
from courier.services.user_service import UserService


class FakeIdentityRepository:
    def __init__(self):
        self.rows: list[Identity] = []

    async def add(self, username: str, secret_digest: str) -> IdentityId:
        identity = Identity(
            id=len(self.rows) + 1, username=username, secret_digest=secret_digest,
        )
        self.rows.append(identity)
        return IdentityId(identity.id)

    async def find(self, username: str, secret_digest: str) -> Identity | None:
        return next(
            (
                i for i in self.rows
                if i.username == username and i.secret_digest == secret_digest
            ),
            None,
        )

    async def count(self) -> int:
        return len(self.rows)


class FakeSessionRepository:
    def __init__(self):
        self.rows: list[Session] = []
        self.updates = 0

    async def find(self, username: str) -> Session | None:
        return next((s for s in self.rows if s.username == username), None)

    async def add(self, username: str, token: str) -> Session:
        if any(s.username == username for s in self.rows):
            raise ConcurrencyError(f"Session for '{username}' was created concurrently")
        session = Session(id=len(self.rows) + 1, username=username, token=token)
        self.rows.append(session)
        return session

    async def update(self, session: Session) -> Session:
        self.updates += 1
        return session


class RacingSessionRepository(FakeSessionRepository):
    def __init__(self):
        super().__init__()
        self._hidden_once = False

    async def find(self, username: str) -> Session | None:
        if not self._hidden_once:
            self._hidden_once = True
            return None
        return await super().find(username)


class FakeMessageRepository:
    def __init__(self):
        self.rows: list[Message] = []

    async def add(self, sender: int, recipient: int, body: str) -> MessageId:
        message = Message(
            id=len(self.rows) + 1, sender=sender, recipient=recipient, body=body,
        )
        self.rows.append(message)
        return MessageId(message.id)

    async def get(self, message_id: int) -> Message | None:
        return next((m for m in self.rows if m.id == message_id), None)

    async def find(self, from_id: int, sender: int, limit: int) -> list[Message]:
        matching = [m for m in self.rows if m.id >= from_id and m.sender == sender]
        return sorted(matching, key=lambda m: m.id, reverse=True)[:limit]


@pytest.fixture
def identities():
    return FakeIdentityRepository()


@pytest.fixture
def sessions():
    return FakeSessionRepository()


@pytest.fixture
def user_service(identities, sessions, authority):
    return UserService(identities, sessions, Sha256Hasher(), authority)


@pytest.fixture
def message_repository():
    return FakeMessageRepository()


@pytest.fixture
def message_service(message_repository):
    return MessageService(message_repository)


@pytest.fixture
def racing_sessions():
    return RacingSessionRepository()
