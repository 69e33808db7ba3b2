"""User ORM — persists the single entity of the service.

Invariants:
    - id is an autoincrement integer primary key, assigned by the database
    - username and email each carry a named unique constraint
    - Constraint names are part of the conflict-classification contract
      (infrastructure/user_repository.py) and must match the migration

Design Decisions:
    - Named UniqueConstraint over unique=True: PostgreSQL reports the name on
      violation, which is how username vs email conflicts are told apart
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cruder.core.domain_types import UserId, UserRecord
from cruder.db.base import Base

USERNAME_CONSTRAINT = "users_username_key"
EMAIL_CONSTRAINT = "users_email_key"


class User(Base):
    """User row."""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name=USERNAME_CONSTRAINT),
        UniqueConstraint("email", name=EMAIL_CONSTRAINT),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)

    def to_record(self) -> UserRecord:
        return UserRecord(
            id=UserId(self.id),
            username=self.username,
            email=self.email,
            full_name=self.full_name,
        )
