"""Error Hierarchy — typed, categorized exceptions for every board failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes or topic state; store errors are 500-level
    - retryable is True only for transient store conflicts (lock contention, deadlock)
    - to_response() produces the REST envelope; no internal details in messages

Design Decisions:
    - Single hierarchy with BoardError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Locked and Deleted share TopicForbiddenError: both are "topic refuses posts",
      CapacityReachedError is a separate Conflict because another topic would accept the post
    - The engine never chooses HTTP framing; http_status is a hint for the request layer only
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    topic_id: int | None = None
    post_id: int | None = None


class BoardError(Exception):
    """Base exception for all board errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.retryable = retryable

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "topic_id": self.context.topic_id,
                    "post_id": self.context.post_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidArgumentError(BoardError):
    """Topic title or post body failed content rules."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(BoardError):
    """Requested topic or post does not exist (or is soft-deleted)."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class TopicForbiddenError(BoardError):
    """Topic refuses new posts."""
    def __init__(
        self, message: str, code: str, topic_id: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.topic_id = topic_id
        super().__init__(
            message, code, ErrorCategory.FORBIDDEN,
            ErrorSeverity.ERROR, ctx, 403,
        )
        self.topic_id = topic_id


class TopicLockedError(TopicForbiddenError):
    """Topic is locked (full or explicitly locked)."""
    def __init__(self, topic_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Topic '{topic_id}' is locked", "TOPIC_LOCKED", topic_id, context,
        )


class TopicDeletedError(TopicForbiddenError):
    """Topic has been soft-deleted."""
    def __init__(self, topic_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Topic '{topic_id}' has been deleted", "TOPIC_DELETED", topic_id, context,
        )


class CapacityReachedError(BoardError):
    """Topic already holds the maximum number of posts."""
    def __init__(
        self, topic_id: int, capacity_limit: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.topic_id = topic_id
        super().__init__(
            f"Topic '{topic_id}' reached max posts ({capacity_limit})",
            "CAPACITY_REACHED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.topic_id = topic_id
        self.capacity_limit = capacity_limit


# ─── Store Errors (500-level) ───────────────────────────────────

class TransientStoreError(BoardError):
    """Lock contention, deadlock or serialization failure. Retry the whole operation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "TRANSIENT_STORE_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 503, retryable=True,
        )


class DatabaseError(BoardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
