"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Implementations raise the domain errors of core/errors.py for not-found and
      conflict outcomes, never raw driver errors
    - Any other storage failure propagates unclassified

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Async in Protocol: implementations do IO; the service awaits them directly
"""

from typing import Protocol

from cruder.core.domain_types import UserId, UserRecord


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def get_all(self) -> list[UserRecord]: ...
    async def get_by_username(self, username: str) -> UserRecord: ...
    async def get_by_id(self, user_id: UserId) -> UserRecord: ...
    async def create(self, user: UserRecord) -> UserRecord: ...
    async def update(self, user: UserRecord) -> UserRecord: ...
    async def delete(self, user_id: UserId) -> None: ...
