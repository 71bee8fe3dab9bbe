"""Admin-only endpoints. The router carries the admin gate, so every route here requires is_admin."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from warden.api.gate import require_admin
from warden.core.database import get_db
from warden.core.errors import ApiError, ErrorKind
from warden.schemas.user import UserRead, UsersListResponse
from warden.services import users

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/test/1/{name}", response_class=PlainTextResponse)
def admin_greeting(name: str) -> str:
    """Smoke-test route for the admin gate."""
    return f"Hi {name}"


@router.get("/users", response_model=UsersListResponse)
def list_users(
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users."""
    return UsersListResponse(users=[UserRead.model_validate(u) for u in users.list_users(db)])


@router.delete("/user/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a user and all of their tokens."""
    if not users.delete_user(db, user_id):
        raise ApiError(ErrorKind.NOT_FOUND, "User not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
