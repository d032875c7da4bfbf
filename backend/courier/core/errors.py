"""Error Hierarchy — typed, categorized exceptions for all Courier failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Token errors keep distinct types but share the ACCESS_DENIED code and message,
      so the caller never learns which check failed
    - Credential errors never say whether the username or the secret was wrong
    - to_response() produces the REST envelope; no internal details in messages

Design Decisions:
    - Single hierarchy with CourierError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identity_id: int | None = None
    username: str | None = None
    message_id: int | None = None
    debug_info: dict[str, Any] | None = None


class CourierError(Exception):
    """Base exception for all Courier errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "identity_id": self.context.identity_id,
                    "message_id": self.context.message_id,
                },
            }
        }


# ─── Credential Errors (400-level) ──────────────────────────────

class InvalidCredentialsError(CourierError):
    """No identity matches the (username, secret digest) pair."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidRequestError(CourierError):
    """Request body, path or query failed schema validation."""
    def __init__(self, details: list[dict[str, str]]):
        super().__init__(
            "Invalid request data",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, None, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class MissingAccessTokenError(CourierError):
    """No x-access-token header on a route that requires one."""
    def __init__(self):
        super().__init__(
            "Missing access token",
            "MISSING_ACCESS_TOKEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, None, 400,
        )


# ─── Token Errors (401) ─────────────────────────────────────────

class AccessDeniedError(CourierError):
    """Presented token does not authorize the caller.

    `reason` is kept for logs only; the response message is always the same.
    """
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "Access denied",
            "ACCESS_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


class MalformedHeaderError(AccessDeniedError):
    """Token is missing the required 'Bearer ' prefix."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("missing Bearer prefix", context)


class InvalidTokenError(AccessDeniedError):
    """Signature, expiry or claims did not verify."""
    def __init__(self, reason: str = "token did not verify", context: ErrorContext | None = None):
        super().__init__(reason, context)


class IdentityMismatchError(AccessDeniedError):
    """Token subject differs from the claimed identity."""
    def __init__(self, subject: int, claimed: int, context: ErrorContext | None = None):
        super().__init__(
            f"token subject {subject} does not match identity {claimed}", context,
        )
        self.subject = subject
        self.claimed = claimed


# ─── Resource Errors ────────────────────────────────────────────

class NotFoundError(CourierError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure / Internal Errors (500-level) ───────────────

class StorageError(CourierError):
    """Storage operation failed. The underlying cause is chained, never rendered."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConcurrencyError(CourierError):
    """Concurrent modification detected (unique constraint lost a race)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class TokenCreationError(CourierError):
    """Signing a fresh token failed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot create the token",
            "TOKEN_CREATION_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class UsernameMismatchError(CourierError):
    """Stored session row belongs to a different username than the identity."""
    def __init__(self, expected: str, found: str, context: ErrorContext | None = None):
        super().__init__(
            "Cannot make the login",
            "USERNAME_MISMATCH", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.expected = expected
        self.found = found


class ConfigurationError(CourierError):
    """Required configuration is missing or invalid. Fatal at startup."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, None, 500,
        )


class InternalError(CourierError):
    """Unexpected failure outside the hierarchy; the original is logged, never rendered."""
    def __init__(self):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, None, 500,
        )
