"""User Repository — SQLAlchemy persistence and storage-failure classification.

Invariants:
    - One statement (plus commit) per operation; no retries, no locking
    - A zero-row result on a targeted get/update/delete is the ONLY not-found signal
    - Uniqueness violations become UsernameAlreadyExistsError, EmailAlreadyExistsError,
      or UserAlreadyExistsError (specific -> specific -> generic)
    - Every other SQLAlchemy error propagates unclassified
    - Session rolled back before any integrity error leaves this module

Design Decisions:
    - classify_conflict() hides driver error shapes (asyncpg, psycopg, sqlite3)
      behind ConflictKind, so services and tests never see SQLSTATE codes
    - UPDATE/DELETE ... RETURNING: mutation and match detection in one round trip
    - Repository owns the commit: each operation is its own transaction
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cruder.core.domain_types import ConflictKind, UserId, UserRecord
from cruder.core.errors import (
    EmailAlreadyExistsError,
    UserAlreadyExistsError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
)
from cruder.models.user import EMAIL_CONSTRAINT, USERNAME_CONSTRAINT, User

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"
_SQLITE_UNIQUE_PREFIX = "UNIQUE constraint failed:"

# PostgreSQL reports constraint names, SQLite reports table.column
_KIND_BY_CONSTRAINT = {
    USERNAME_CONSTRAINT: ConflictKind.USERNAME,
    EMAIL_CONSTRAINT: ConflictKind.EMAIL,
    "users.username": ConflictKind.USERNAME,
    "users.email": ConflictKind.EMAIL,
}

_CONFLICT_ERRORS = {
    ConflictKind.USERNAME: UsernameAlreadyExistsError,
    ConflictKind.EMAIL: EmailAlreadyExistsError,
    ConflictKind.OTHER: UserAlreadyExistsError,
}


# ─── Conflict classification ────────────────────────────────────

def _driver_errors(exc: IntegrityError) -> list[BaseException]:
    """DBAPI error plus the native driver error it adapts (asyncpg)."""
    errors = []
    if exc.orig is not None:
        errors.append(exc.orig)
        if exc.orig.__cause__ is not None:
            errors.append(exc.orig.__cause__)
    return errors


def _sqlstate(err: BaseException) -> str | None:
    for attr in ("sqlstate", "pgcode"):
        value = getattr(err, attr, None)
        if value:
            return str(value)
    return None


def _constraint_name(err: BaseException) -> str | None:
    name = getattr(err, "constraint_name", None)
    if name:
        return name
    diag = getattr(err, "diag", None)
    return getattr(diag, "constraint_name", None) if diag is not None else None


def _sqlite_columns(err: BaseException) -> list[str] | None:
    text = str(err)
    if not text.startswith(_SQLITE_UNIQUE_PREFIX):
        return None
    return [col.strip() for col in text[len(_SQLITE_UNIQUE_PREFIX):].split(",")]


def classify_conflict(exc: IntegrityError) -> ConflictKind | None:
    """Classify a uniqueness violation. Returns None for other integrity errors."""
    is_unique = False
    constraint = None
    for err in _driver_errors(exc):
        if _sqlstate(err) == UNIQUE_VIOLATION_SQLSTATE:
            is_unique = True
            constraint = constraint or _constraint_name(err)
        columns = _sqlite_columns(err)
        if columns is not None:
            is_unique = True
            # composite keys are never individually identified
            if len(columns) == 1:
                constraint = constraint or columns[0]
    if not is_unique:
        return None
    return _KIND_BY_CONSTRAINT.get(constraint, ConflictKind.OTHER)


# ─── Repository ─────────────────────────────────────────────────

class SqlAlchemyUserRepository:
    """UserRepository over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> list[UserRecord]:
        result = await self.db.execute(select(User).order_by(User.id))
        return [user.to_record() for user in result.scalars().all()]

    async def get_by_username(self, username: str) -> UserRecord:
        return await self._get_one(User.username == username)

    async def get_by_id(self, user_id: UserId) -> UserRecord:
        return await self._get_one(User.id == user_id)

    async def create(self, user: UserRecord) -> UserRecord:
        """Insert user; any client-supplied id is ignored."""
        row = User(
            username=user.username,
            email=user.email,
            full_name=user.full_name,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self._raise_integrity_error(e)
        logger.info("User created", extra={"user_id": row.id})
        return row.to_record()

    async def update(self, user: UserRecord) -> UserRecord:
        """Full replace of username/email/full_name for the row with user.id."""
        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(
                username=user.username,
                email=user.email,
                full_name=user.full_name,
            )
            .returning(User.id, User.username, User.email, User.full_name)
        )
        try:
            result = await self.db.execute(stmt)
            row = result.one_or_none()
            if row is None:
                await self.db.rollback()
                raise UserNotFoundError()
            await self.db.commit()
        except IntegrityError as e:
            await self._raise_integrity_error(e)
        logger.info("User updated", extra={"user_id": row.id})
        return UserRecord(
            id=UserId(row.id),
            username=row.username,
            email=row.email,
            full_name=row.full_name,
        )

    async def delete(self, user_id: UserId) -> None:
        result = await self.db.execute(
            delete(User).where(User.id == user_id).returning(User.id),
        )
        if result.scalar_one_or_none() is None:
            await self.db.rollback()
            raise UserNotFoundError()
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})

    async def _get_one(self, criterion) -> UserRecord:
        result = await self.db.execute(select(User).where(criterion))
        user = result.scalar_one_or_none()
        if user is None:
            raise UserNotFoundError()
        return user.to_record()

    async def _raise_integrity_error(self, exc: IntegrityError) -> None:
        """Roll back, then raise the conflict error or re-raise exc unchanged."""
        await self.db.rollback()
        kind = classify_conflict(exc)
        if kind is None:
            logger.error(f"Unclassified integrity error: {exc.orig}")
            raise exc
        error = _CONFLICT_ERRORS[kind]()
        logger.info(
            f"Uniqueness conflict on {kind.value}",
            extra={"error_code": error.code},
        )
        raise error from exc
