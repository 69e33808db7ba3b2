"""Users Routes — HTTP surface over UserService.

Invariants:
    - Routes never contain business logic: parse, delegate, serialize
    - Domain errors are NOT caught here; the global CruderError handler maps them
    - PUT rejects a body id that differs from the path id before calling the service
    - Non-integer path ids -> 400 "invalid id"
    - PUT parses the path id before the body: a bad id wins over a bad body

Design Decisions:
    - Path ids parsed by hand (str -> int) so the response is the same
      "invalid id" envelope on every route, not a generic validation error
    - PUT takes the body raw and validates it in the handler, after the path id
    - One UserService per request: repository is bound to the request's AsyncSession,
      validator is the process-wide cached instance
"""

import logging
import re
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from cruder.core.domain_types import UserId
from cruder.core.errors import InvalidUserIdError, UserIdMismatchError
from cruder.core.validate_user import get_user_validator
from cruder.infrastructure.database import get_db
from cruder.infrastructure.user_repository import SqlAlchemyUserRepository
from cruder.schemas.user import UserCreate, UserResponse, UserUpdate
from cruder.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlAlchemyUserRepository(db), get_user_validator())


def parse_user_id(raw: str) -> UserId:
    """Parse a path id as a signed 64-bit integer or raise InvalidUserIdError."""
    if not _ID_PATTERN.fullmatch(raw):
        raise InvalidUserIdError()
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise InvalidUserIdError()
    return UserId(value)


def parse_update_body(body: Any) -> UserUpdate:
    """Validate a raw PUT body; failures render like any other body error."""
    try:
        return UserUpdate.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors()],
        ) from e


@router.get("", response_model=list[UserResponse])
async def get_all_users(service: UserService = Depends(get_user_service)):
    """List all users in insertion order."""
    users = await service.get_all()
    return [UserResponse.from_record(u) for u in users]


@router.get("/username/{username}", response_model=UserResponse)
async def get_user_by_username(
    username: str, service: UserService = Depends(get_user_service),
):
    user = await service.get_by_username(username)
    return UserResponse.from_record(user)


@router.get("/id/{user_id}", response_model=UserResponse)
async def get_user_by_id(
    user_id: str, service: UserService = Depends(get_user_service),
):
    user = await service.get_by_id(parse_user_id(user_id))
    return UserResponse.from_record(user)


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Create a user. The id is assigned by the database."""
    user = await service.create(body.to_record())
    return UserResponse.from_record(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: Any = Body(None),
    service: UserService = Depends(get_user_service),
):
    """Full replace of username, email and full_name."""
    path_id = parse_user_id(user_id)
    payload = parse_update_body(body)
    if payload.id != path_id:
        raise UserIdMismatchError()
    user = await service.update(payload.to_record())
    return UserResponse.from_record(user)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_user(
    user_id: str, service: UserService = Depends(get_user_service),
):
    await service.delete(parse_user_id(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
