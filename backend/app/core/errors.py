"""Error Hierarchy — typed, categorized exceptions for all Weeklist failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries a distinct, user-facing message (the envelope "message")
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with WeeklistError base: FastAPI global handler catches all
      (uniform {message, error} envelope)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone

from app.core.domain_types import MutationAction


GENERIC_FAILURE_MESSAGE = "Something went wrong!"


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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    weeklist_id: str | None = None
    task_id: str | None = None


class WeeklistError(Exception):
    """Base exception for all Weeklist errors."""

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
        """Convert to the standardized REST envelope."""
        return {
            "message": self.message,
            "data": None,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }

    def log_extra(self) -> dict:
        """Structured logging fields for this error."""
        return {
            "error_code": self.code,
            "user_id": self.context.user_id,
            "weeklist_id": self.context.weeklist_id,
            "task_id": self.context.task_id,
        }


# ─── Identity Errors ────────────────────────────────────────────

class DuplicateIdentityError(WeeklistError):
    """Another user already owns the email or mobile number."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email or mobile already exists!",
            "DUPLICATE_IDENTITY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class InvalidCredentialsError(WeeklistError):
    """Password does not match the stored hash."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials!",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthError(WeeklistError):
    """Bearer token missing, malformed, expired, or pointing at no user."""
    def __init__(self, reason: str = "", context: ErrorContext | None = None):
        super().__init__(
            "You're not logged in!",
            "NOT_LOGGED_IN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


# ─── Not-Found Errors ───────────────────────────────────────────

class ResourceNotFoundError(WeeklistError):
    """Requested resource does not exist (or is not owned by the caller)."""
    def __init__(
        self, message: str, code: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("User does not exist", "USER_NOT_FOUND", context)


class WeeklistNotFoundError(ResourceNotFoundError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Weeklist does not exist!", "WEEKLIST_NOT_FOUND", context,
        )


class TaskNotFoundError(ResourceNotFoundError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Task does not exist.", "TASK_NOT_FOUND", context)


# ─── Lifecycle Rule Errors ──────────────────────────────────────

class QuotaExceededError(WeeklistError):
    """Owner already has the maximum number of open weeklists."""
    def __init__(self, open_count: int, context: ErrorContext | None = None):
        super().__init__(
            "Cannot create, exceeded the limit!",
            "QUOTA_EXCEEDED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.open_count = open_count


class WindowExpiredError(WeeklistError):
    """Structural edit attempted after the mutation window closed."""
    def __init__(
        self, action: MutationAction, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot {action.value}. Exceeded modification time.",
            "WINDOW_EXPIRED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )
        self.action = action


class InactiveWeeklistError(WeeklistError):
    """Toggle attempted on a swept (inactive) weeklist."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Inactive weeklist.",
            "WEEKLIST_INACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class AlreadyCompletedError(WeeklistError):
    """Toggle attempted on a weeklist whose tasks are all complete."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot mark task. The weeklist is already completed.",
            "WEEKLIST_COMPLETED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConcurrencyError(WeeklistError):
    """Concurrent modification detected by the version check."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Weeklist was modified by another request. Please retry.",
            "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class DatabaseError(WeeklistError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            GENERIC_FAILURE_MESSAGE,
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.detail = f"Database {operation} failed: {message}"
        self.operation = operation
