"""Error Mapping — domain error category -> HTTP status class.

Invariants:
    - Lookup is by ErrorCategory (closed enum), never by message text
    - VALIDATION -> 400, RESOURCE_NOT_FOUND -> 404, CONFLICT -> 409
    - Everything else (DatabaseError, non-Cruder exceptions) -> 500 with a
      fixed opaque message; raw error text never reaches the caller

Design Decisions:
    - Table keyed by category rather than by exception class: new subclasses
      inherit their status from their category
"""

from dataclasses import dataclass
from enum import IntEnum

from cruder.core.errors import CruderError, ErrorCategory, ErrorSeverity

INTERNAL_ERROR_CODE = "INTERNAL_ERROR"
INTERNAL_ERROR_MESSAGE = "internal server error"


class StatusClass(IntEnum):
    """Externally visible status classes."""
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    INTERNAL_ERROR = 500


_STATUS_BY_CATEGORY: dict[ErrorCategory, StatusClass] = {
    ErrorCategory.VALIDATION: StatusClass.BAD_REQUEST,
    ErrorCategory.RESOURCE_NOT_FOUND: StatusClass.NOT_FOUND,
    ErrorCategory.CONFLICT: StatusClass.CONFLICT,
}


@dataclass(frozen=True)
class MappedError:
    """Caller-visible translation of an error."""
    status: StatusClass
    code: str
    message: str
    category: str
    severity: str

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category,
                "severity": self.severity,
            },
        }


INTERNAL_ERROR = MappedError(
    status=StatusClass.INTERNAL_ERROR,
    code=INTERNAL_ERROR_CODE,
    message=INTERNAL_ERROR_MESSAGE,
    category=ErrorCategory.INTERNAL.value,
    severity=ErrorSeverity.CRITICAL.value,
)


def map_error(exc: BaseException | None) -> MappedError:
    """Translate any error to its status class; unmapped -> INTERNAL_ERROR."""
    if not isinstance(exc, CruderError):
        return INTERNAL_ERROR
    status = _STATUS_BY_CATEGORY.get(exc.category)
    if status is None:
        return INTERNAL_ERROR
    return MappedError(
        status=status,
        code=exc.code,
        message=exc.message,
        category=exc.category.value,
        severity=exc.severity.value,
    )
