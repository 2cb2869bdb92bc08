"""Error Hierarchy: typed, categorized exceptions for all BookPost failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Four HTTP kinds only: 400 bad request, 401 unauthorized, 404 not found, 500 internal
    - to_response() produces the REST envelope rendered by the global handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BookPostError base: one global handler catches all
    - ErrorContext as dataclass: carries observability fields without coupling to logging
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    UNAUTHORIZED = "unauthorized"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    resource_id: int | None = None
    debug_info: dict[str, Any] | None = None


class BookPostError(Exception):
    """Base exception for all BookPost errors."""

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
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(BookPostError):
    """Request is well-formed but violates a business rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedError(BookPostError):
    """Caller is not authenticated, or not allowed to touch the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(BookPostError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: Any = None,
        context: ErrorContext | None = None,
    ):
        message = (
            f"{resource_type} not found" if resource_id is None
            else f"{resource_type} '{resource_id}' not found"
        )
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalError(BookPostError):
    """Operation failed for a reason the caller cannot fix."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(BookPostError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class ExternalServiceError(BookPostError):
    """Outbound HTTP call (joke API, invoice gateway) failed."""
    def __init__(
        self, message: str, service: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "EXTERNAL_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.service = service
