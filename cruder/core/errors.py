"""Error Hierarchy — typed, categorized exceptions for every Cruder failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation, not-found and conflict errors are terminal and never retried
    - Only the validator and the user repository originate domain errors;
      services re-raise the same instance untouched
    - No internal details in messages; the REST envelope is built by api/error_mapping.py

Design Decisions:
    - Single hierarchy with CruderError base: the global handler catches all (ADR: uniform error shape)
    - Category drives the HTTP status (api/error_mapping.py), not exception identity
    - Username/Email conflicts subclass UserAlreadyExistsError: callers that only
      care about "some uniqueness conflict" can catch the generic one
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories — closed set consumed by the error mapper."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class CruderError(Exception):
    """Base exception for all Cruder errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity


# ─── Validation Errors (400-level) ──────────────────────────────

class UserValidationError(CruderError):
    """User payload failed a structural field rule."""
    def __init__(self, message: str, code: str, field: str):
        super().__init__(
            message, code, ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        )
        self.field = field


class InvalidEmailError(UserValidationError):
    def __init__(self):
        super().__init__("invalid email format", "INVALID_EMAIL", "email")


class InvalidUsernameError(UserValidationError):
    def __init__(self):
        super().__init__(
            "invalid username format (3-50 chars, lowercase letters, numbers, "
            "underscores, starts with letter)",
            "INVALID_USERNAME", "username",
        )


class InvalidFullNameError(UserValidationError):
    def __init__(self):
        super().__init__(
            "invalid full name format (2-100 chars, letters, spaces, "
            "apostrophes, hyphens, starts/ends with letter)",
            "INVALID_FULL_NAME", "full_name",
        )


class InvalidUserIdError(CruderError):
    """Path id is not an integer. Raised by routes, not by the core."""
    def __init__(self):
        super().__init__(
            "invalid id", "INVALID_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING,
        )


class UserIdMismatchError(CruderError):
    """Update body id differs from path id. Raised by routes before the service."""
    def __init__(self):
        super().__init__(
            "id in path and body do not match", "ID_MISMATCH",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        )


# ─── Not Found (404-level) ──────────────────────────────────────

class UserNotFoundError(CruderError):
    """Targeted user does not exist (zero rows matched)."""
    def __init__(self):
        super().__init__(
            "user not found", "USER_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO,
        )


# ─── Conflicts (409-level) ──────────────────────────────────────

class UserAlreadyExistsError(CruderError):
    """Write violated a uniqueness constraint that is not individually identified."""
    def __init__(
        self,
        message: str = "user already exists",
        code: str = "USER_ALREADY_EXISTS",
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
        )


class UsernameAlreadyExistsError(UserAlreadyExistsError):
    def __init__(self):
        super().__init__("username already exists", "USERNAME_ALREADY_EXISTS")


class EmailAlreadyExistsError(UserAlreadyExistsError):
    def __init__(self):
        super().__init__("email already exists", "EMAIL_ALREADY_EXISTS")


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CruderError):
    """Database operation failed — opaque to API callers."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, ErrorSeverity.CRITICAL,
        )
