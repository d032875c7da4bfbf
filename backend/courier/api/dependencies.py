"""API Dependencies — wiring of services and the authorization gate.

Invariants:
    - One SessionAuthority per process, built from settings on first use
    - Services are built per request around that request's AsyncSession
    - x-access-token is a required header; its absence is a 400 validation error
"""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from courier.config import get_settings
from courier.core.domain_types import IdentityId
from courier.core.errors import AccessDeniedError
from courier.core.password import PasswordHasher, Sha256Hasher
from courier.core.session_authority import SessionAuthority
from courier.infrastructure.database import get_db
from courier.repositories.identity_repository import SqlIdentityRepository
from courier.repositories.message_repository import SqlMessageRepository
from courier.repositories.session_repository import SqlSessionRepository
from courier.services.message_service import MessageService
from courier.services.user_service import UserService

logger = logging.getLogger(__name__)

AccessToken = Annotated[str, Header(alias="x-access-token")]


@lru_cache
def get_session_authority() -> SessionAuthority:
    settings = get_settings()
    return SessionAuthority(
        settings.jwt_secret,
        ttl=timedelta(seconds=settings.token_ttl_seconds),
        algorithm=settings.token_algorithm,
    )


def get_password_hasher() -> PasswordHasher:
    return Sha256Hasher()


def get_user_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    authority: SessionAuthority = Depends(get_session_authority),
) -> UserService:
    return UserService(
        SqlIdentityRepository(db), SqlSessionRepository(db), hasher, authority,
    )


def get_message_service(db: AsyncSession = Depends(get_db)) -> MessageService:
    return MessageService(SqlMessageRepository(db))


def authorize_caller(
    authority: SessionAuthority, token: str, identity_id: int,
) -> None:
    """Gate a request on the token proving identity_id."""
    try:
        authority.authorize(token, identity_id)
    except AccessDeniedError as e:
        logger.warning(
            f"Access denied: {e.reason}",
            extra={"identity_id": identity_id, "error_code": e.code},
        )
        raise


def verify_caller(authority: SessionAuthority, token: str) -> IdentityId:
    """Gate a request on any valid token; returns the token's identity."""
    try:
        return authority.verify(token)
    except AccessDeniedError as e:
        logger.warning(f"Access denied: {e.reason}", extra={"error_code": e.code})
        raise
