"""User Schemas — request/response shapes for the users API.

Invariants:
    - Schemas check TYPES only; field rules live in core/validate_user.py so the
      email -> username -> full_name error order is decided in one place
    - UserCreate has no id: any id in the body is dropped
    - UserUpdate requires id; the route compares it with the path id

Design Decisions:
    - extra="ignore" on create: clients echoing a full user object still work
"""

from pydantic import BaseModel, ConfigDict

from cruder.core.domain_types import UserRecord


class UserCreate(BaseModel):
    """User creation payload."""
    model_config = ConfigDict(extra="ignore")

    username: str
    email: str
    full_name: str

    def to_record(self) -> UserRecord:
        return UserRecord(
            username=self.username, email=self.email, full_name=self.full_name,
        )


class UserUpdate(UserCreate):
    """Full-replace update payload."""
    id: int

    def to_record(self) -> UserRecord:
        return super().to_record().with_id(self.id)


class UserResponse(BaseModel):
    """User response — public-facing user data."""
    id: int
    username: str
    email: str
    full_name: str

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
        )
