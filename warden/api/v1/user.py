"""User endpoints: registration, login and the caller's own record."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from warden.api.gate import CurrentPrincipal
from warden.core.context import AppContext, get_context
from warden.core.database import get_db
from warden.core.errors import ApiError, ErrorKind
from warden.core.security import password_meets_requirements
from warden.schemas.auth import LoginRequest, LoginResponse
from warden.schemas.user import NewUser, UserRead
from warden.services import users

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=int)
def create_user(
    body: NewUser,
    context: Annotated[AppContext, Depends(get_context)],
    db: Annotated[Session, Depends(get_db)],
) -> int:
    """Register a user. Returns the new user id."""
    if users.username_exists(db, body.username):
        raise ApiError(ErrorKind.CONFLICT, "Username already exists.")
    if not password_meets_requirements(body.password, context.settings.PASSWORD_MIN_LEN):
        raise ApiError(
            ErrorKind.BAD_REQUEST,
            f"Password must be at least {context.settings.PASSWORD_MIN_LEN} characters.",
        )
    user = users.create_user(db, body.username, body.password, body.email_address)
    return user.user_id


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns an opaque token.
    Include the token in the Token header on later requests.
    """
    return users.login(db, body.username, body.password)


@router.get("", response_model=UserRead)
def get_user(
    principal: CurrentPrincipal,
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Return the authenticated caller's own user record."""
    user = users.find_user_by_id(db, principal.user_id)
    if user is None:
        raise ApiError(ErrorKind.UNAUTHORIZED)
    return UserRead.model_validate(user)
