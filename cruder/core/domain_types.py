"""Domain Types — the User record and conflict descriptor shared by core and shell.

Invariants:
    - UserRecord is immutable; id is None until the store assigns one
    - ConflictKind is a closed set: username, email, or an unidentified constraint

Design Decisions:
    - Frozen dataclass over ORM objects in core: validator and service never touch
      SQLAlchemy state (ADR: ExMA Functional Core)
    - str Enum for ConflictKind: logs and test output stay readable
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import NewType


UserId = NewType("UserId", int)


@dataclass(frozen=True)
class UserRecord:
    """A user as seen by validator, service and repository."""
    username: str
    email: str
    full_name: str
    id: UserId | None = None

    def with_id(self, user_id: int) -> "UserRecord":
        return replace(self, id=UserId(user_id))


class ConflictKind(str, Enum):
    """Which uniqueness constraint a failed write violated."""
    USERNAME = "username"
    EMAIL = "email"
    OTHER = "other"
