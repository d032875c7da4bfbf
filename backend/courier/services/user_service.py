"""User Service — registration and the login upsert workflow.

Invariants:
    - login() leaves exactly one Session row for the username, holding the
      token it just issued
    - Unknown username and wrong secret both surface as InvalidCredentialsError
    - Storage failures surface as StorageError from the repositories, unwrapped

Design Decisions:
    - read / branch / write kept as three explicit steps; the insert branch
      falls back to the update branch when the unique username constraint
      reports a concurrent insert (ConcurrencyError)
"""

import logging

from courier.core.domain_types import IdentityId
from courier.core.errors import (
    ConcurrencyError,
    ErrorContext,
    InvalidCredentialsError,
    StorageError,
    UsernameMismatchError,
)
from courier.core.password import PasswordHasher
from courier.core.session_authority import SessionAuthority
from courier.models.identity import Identity
from courier.models.session import Session
from courier.repositories.identity_repository import IdentityRepository
from courier.repositories.session_repository import SessionRepository

logger = logging.getLogger(__name__)


class UserService:
    """Registers identities and logs them in."""

    def __init__(
        self,
        identities: IdentityRepository,
        sessions: SessionRepository,
        hasher: PasswordHasher,
        authority: SessionAuthority,
    ):
        self._identities = identities
        self._sessions = sessions
        self._hasher = hasher
        self._authority = authority

    async def create_user(self, username: str, secret: str) -> IdentityId:
        """Store a new identity with the hashed secret and return its id."""
        identity_id = await self._identities.add(username, self._hasher.hash(secret))
        logger.info(
            "Identity registered",
            extra={"identity_id": identity_id, "username": username},
        )
        return identity_id

    async def find_user(self, username: str, secret: str) -> Identity:
        identity = await self._identities.find(username, self._hasher.hash(secret))
        if identity is None:
            logger.debug("Login rejected", extra={"username": username})
            raise InvalidCredentialsError(ErrorContext(username=username))
        return identity

    async def login(self, username: str, secret: str) -> Session:
        """Authenticate and upsert the Session row with a fresh token.

        Raises InvalidCredentialsError, TokenCreationError, UsernameMismatchError
        or StorageError.
        """
        identity = await self.find_user(username, secret)
        # plain values: a rolled-back insert expires every ORM object in the session
        identity_id, identity_username = identity.id, identity.username
        token = self._authority.issue(identity_id)
        log_extra = {"identity_id": identity_id, "username": identity_username}

        existing = await self._sessions.find(identity_username)
        if existing is None:
            try:
                session = await self._sessions.add(identity_username, token)
                logger.info("Session created", extra=log_extra)
                return session
            except ConcurrencyError:
                logger.warning(
                    "Concurrent login inserted the session first, updating it",
                    extra=log_extra,
                )
                existing = await self._sessions.find(identity_username)
                if existing is None:
                    raise StorageError(
                        "Session vanished after a concurrent insert", "query",
                        ErrorContext(username=identity_username),
                    )

        return await self._replace_token(
            identity_id, identity_username, existing, token,
        )

    async def _replace_token(
        self,
        identity_id: IdentityId,
        username: str,
        session: Session,
        token: str,
    ) -> Session:
        if session.username != username:
            raise UsernameMismatchError(
                username, session.username,
                ErrorContext(identity_id=identity_id, username=username),
            )
        session.token = token
        updated = await self._sessions.update(session)
        logger.info(
            "Session token replaced",
            extra={"identity_id": identity_id, "username": username},
        )
        return updated

    async def total(self) -> int:
        """Number of registered identities."""
        return await self._identities.count()
