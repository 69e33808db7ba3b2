"""User Validation — structural field rules applied before any write reaches storage.

Invariants:
    - All checks are PURE: no IO, no async, no DB, no side effects
    - Return the error on violation, None on success
    - validate() runs email -> username -> full_name; first error wins
    - Patterns compiled once per UserValidator and never mutated

Design Decisions:
    - Return errors (not raise): the service decides when to raise, so the
      rules stay testable as plain predicates (ADR: ExMA Functional Core)
    - Email grammar is a deliberately simplified approximation, NOT RFC 5322;
      callers depend on its exact permissiveness
    - re.ASCII: \\w means [A-Za-z0-9_] only, matching the grammar's byte semantics
"""

import re
from functools import lru_cache

from cruder.core.domain_types import UserRecord
from cruder.core.errors import (
    InvalidEmailError,
    InvalidFullNameError,
    InvalidUsernameError,
    UserValidationError,
)

EMAIL_PATTERN = r"[\w\-.]+@([\w-]+\.)+[\w-]{2,4}"
USERNAME_PATTERN = r"[a-z][a-z0-9_]{2,49}"
FULL_NAME_PATTERN = r"[A-Za-z][A-Za-z' -]{0,98}[A-Za-z]"


class UserValidator:
    """Holds the compiled field rules for User payloads."""

    def __init__(self):
        self._email = re.compile(EMAIL_PATTERN, re.ASCII)
        self._username = re.compile(USERNAME_PATTERN, re.ASCII)
        self._full_name = re.compile(FULL_NAME_PATTERN, re.ASCII)

    def check_email(self, email: str) -> InvalidEmailError | None:
        """Rule 1: simplified email grammar."""
        if self._email.fullmatch(email) is None:
            return InvalidEmailError()
        return None

    def check_username(self, username: str) -> InvalidUsernameError | None:
        """Rule 2: lowercase, starts with a letter, 3-50 chars."""
        if self._username.fullmatch(username) is None:
            return InvalidUsernameError()
        return None

    def check_full_name(self, full_name: str) -> InvalidFullNameError | None:
        """Rule 3: letters, spaces, apostrophes, hyphens; 2-100 chars."""
        if self._full_name.fullmatch(full_name) is None:
            return InvalidFullNameError()
        return None

    def validate(self, user: UserRecord) -> UserValidationError | None:
        """Chain all rules in fixed order. Returns first error or None."""
        return (
            self.check_email(user.email)
            or self.check_username(user.username)
            or self.check_full_name(user.full_name)
        )


@lru_cache
def get_user_validator() -> UserValidator:
    """Process-wide validator, built on first use."""
    return UserValidator()
