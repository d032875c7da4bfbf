"""Session Authority — issues and validates signed, time-limited bearer tokens.

Invariants:
    - Tokens are JWTs with claims {sub: str(identity_id), exp: issued_at + ttl}
    - authorize() is stateless: it never consults the Credential Store or the
      Session row. A token superseded by a newer login stays valid until exp.
    - Presented tokens must carry the "Bearer " prefix
    - Expiry is judged against the injected clock, same clock used to issue
    - An empty signing secret is a ConfigurationError (fatal at startup)

Design Decisions:
    - PyJWT for encode/decode; HS512 by default, overridable from settings
    - sub is encoded as a string: PyJWT rejects non-string subjects on decode
    - exp is checked here rather than by PyJWT so tests can drive the clock
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from courier.core.domain_types import BEARER_PREFIX, IdentityId
from courier.core.errors import (
    ConfigurationError,
    IdentityMismatchError,
    InvalidTokenError,
    MalformedHeaderError,
    TokenCreationError,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_TOKEN_TTL = timedelta(days=1)
DEFAULT_ALGORITHM = "HS512"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionAuthority:
    """Mints tokens bound to an identity id and checks presented tokens."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Clock = utc_now,
    ):
        if not secret:
            raise ConfigurationError("JWT signing secret must be set and non-empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, identity_id: int) -> str:
        """Sign a fresh token for identity_id, valid for the configured ttl."""
        claims = {
            "sub": str(identity_id),
            "exp": self._clock() + self._ttl,
        }
        try:
            return jwt.encode(claims, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            logger.error(
                f"Token signing failed: {e}",
                extra={"identity_id": identity_id, "error_code": "TOKEN_CREATION_FAILED"},
            )
            raise TokenCreationError() from e

    def verify(self, presented: str) -> IdentityId:
        """Strip the Bearer prefix, check signature and expiry, return the subject."""
        if not presented or not presented.startswith(BEARER_PREFIX):
            raise MalformedHeaderError()
        raw = presented[len(BEARER_PREFIX):]

        try:
            claims = jwt.decode(
                raw,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"], "verify_exp": False},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"token did not verify: {e}") from e

        exp = claims["exp"]
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise InvalidTokenError("exp claim is not a timestamp")
        if exp <= self._clock().timestamp():
            raise InvalidTokenError("token expired")

        try:
            return IdentityId(int(claims["sub"]))
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("sub claim is not an identity id") from e

    def authorize(self, presented: str, claimed_identity_id: int) -> None:
        """Succeed only if the token verifies and its subject is the claimed identity."""
        subject = self.verify(presented)
        if subject != claimed_identity_id:
            raise IdentityMismatchError(subject, claimed_identity_id)
