"""User Service — validation gate in front of the user repository.

Invariants:
    - create/update run the validator BEFORE any repository call; a rejected
      payload never reaches storage
    - get_all/get_by_username/get_by_id/delete pass straight through (no validation)
    - Errors from validator and repository propagate as the same instance —
      never wrapped, never retried

Design Decisions:
    - Validator injected, not imported: tests swap in stubs without patching
      (ADR: ExMA impureim sandwich — pure check, then IO)
"""

import logging

from cruder.core.domain_types import UserId, UserRecord
from cruder.core.repository_protocols import UserRepository
from cruder.core.validate_user import UserValidator

logger = logging.getLogger(__name__)


class UserService:
    """Orchestrates UserValidator and UserRepository."""

    def __init__(self, repository: UserRepository, validator: UserValidator):
        self.repository = repository
        self.validator = validator

    async def get_all(self) -> list[UserRecord]:
        return await self.repository.get_all()

    async def get_by_username(self, username: str) -> UserRecord:
        return await self.repository.get_by_username(username)

    async def get_by_id(self, user_id: UserId) -> UserRecord:
        return await self.repository.get_by_id(user_id)

    async def create(self, user: UserRecord) -> UserRecord:
        self._check(user)
        return await self.repository.create(user)

    async def update(self, user: UserRecord) -> UserRecord:
        """Full replace. Caller has already reconciled path and body ids."""
        self._check(user)
        return await self.repository.update(user)

    async def delete(self, user_id: UserId) -> None:
        await self.repository.delete(user_id)

    def _check(self, user: UserRecord) -> None:
        error = self.validator.validate(user)
        if error is not None:
            logger.info(
                f"Rejected user payload: {error.message}",
                extra={"error_code": error.code, "user_id": user.id},
            )
            raise error
