"""Error Hierarchy — typed, categorized exceptions for every handler failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - message is the underlying failure text, passed through to the client unchanged
    - context.user_message is the handler-level message ("Error registering user", ...)
    - to_response() always produces {"message": ..., "error": ...}

Design Decisions:
    - Single hierarchy with WeatherPassError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Tagged variants at the persistence/provider boundary instead of one generic 500
      (ADR: client-caused vs infrastructure failures get distinct status codes)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

DEFAULT_USER_MESSAGE = "Request failed"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"
    AUTHENTICATION = "authentication"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: int | None = None
    location: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class WeatherPassError(Exception):
    """Base exception for all WeatherPass errors."""

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
        """Convert to the {message, error} REST envelope."""
        return {
            "message": self.context.user_message or DEFAULT_USER_MESSAGE,
            "error": self.message,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidInputError(WeatherPassError):
    """Submitted data rejected before or by the persistence layer."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class AuthenticationError(WeatherPassError):
    """Credentials missing or not matching a stored account."""
    def __init__(self, message: str = "Invalid email or password", context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "Authentication required"
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 401,
        )


class ConflictError(WeatherPassError):
    """Unique or foreign-key constraint violated (e.g. duplicate email)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class LocationNotFoundError(WeatherPassError):
    """Weather provider does not know the requested location."""
    def __init__(self, message: str, location: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.location = location
        super().__init__(
            message, "LOCATION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceUnavailableError(WeatherPassError):
    """Database unreachable or refused the operation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DATABASE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class DatabaseError(WeatherPassError):
    """Database operation failed for a reason other than constraints or connectivity."""
    def __init__(self, message: str, operation: str = "unknown", context: ErrorContext | None = None):
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class UpstreamUnavailableError(WeatherPassError):
    """Weather provider could not be reached (DNS, connect, read failures)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UPSTREAM_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class UpstreamRejectedError(WeatherPassError):
    """Weather provider answered with a non-success status or an unreadable body."""
    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UPSTREAM_REJECTED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.upstream_status = upstream_status


class UpstreamTimeoutError(WeatherPassError):
    """Weather provider did not answer within the configured timeout."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UPSTREAM_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 504,
        )


class InternalError(WeatherPassError):
    """Unclassified failure caught at a handler boundary."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
