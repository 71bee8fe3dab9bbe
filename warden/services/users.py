"""User store operations: lookup, registration, login and administrative delete."""

import logging

from argon2.exceptions import HashingError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from warden.core.errors import ApiError, ErrorKind
from warden.core.security import (
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    hash_password,
    needs_rehash,
    now_millis,
    verify_password,
)
from warden.models import Token, User
from warden.schemas.auth import LoginResponse
from warden.services.tokens import issue_token

logger = logging.getLogger(__name__)

# Verified against when the username is unknown, so both failure paths cost one Argon2 verify.
_DUMMY_HASH = hash_password("warden-unknown-user-placeholder")


def _store_failure(message: str, **extra: object) -> ApiError:
    logger.exception(message, extra=extra)
    return ApiError(ErrorKind.INTERNAL_SERVER_ERROR)


def _hash_or_fail(password: str) -> str:
    try:
        return hash_password(password)
    except HashingError:
        logger.exception("Password hashing failed")
        raise ApiError(ErrorKind.INTERNAL_SERVER_ERROR)


def find_user_by_username(session: Session, username: str) -> User | None:
    try:
        return (
            session.query(User)
            .filter(User.username == username.lower())
            .first()
        )
    except SQLAlchemyError:
        raise _store_failure("User lookup by username failed")


def find_user_by_id(session: Session, user_id: int) -> User | None:
    try:
        return session.query(User).filter(User.user_id == user_id).first()
    except SQLAlchemyError:
        raise _store_failure("User lookup by id failed", user_id=user_id)


def username_exists(session: Session, username: str) -> bool:
    return find_user_by_username(session, username) is not None


def list_users(session: Session) -> list[User]:
    try:
        return session.query(User).order_by(User.user_id).all()
    except SQLAlchemyError:
        raise _store_failure("Listing users failed")


def create_user(
    session: Session,
    username: str,
    password: str,
    email_address: str | None = None,
    is_admin: bool = False,
    now: int | None = None,
) -> User:
    """
    Insert a new user with a freshly hashed password.

    The username is stored lowercased. Callers validate the password policy first.
    Raises ApiError(CONFLICT) when the username is taken (including a concurrent insert).
    """
    created = now_millis() if now is None else now
    user = User(
        username=username.lower(),
        password_hash=_hash_or_fail(password),
        email_address=email_address,
        creation_time=created,
        last_login_time=created,
        is_admin=is_admin,
    )
    try:
        session.add(user)
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ApiError(ErrorKind.CONFLICT, "Username already exists.")
    except SQLAlchemyError:
        session.rollback()
        raise _store_failure("User insert failed")
    session.refresh(user)
    logger.info("User created", extra={"user_id": user.user_id, "is_admin": user.is_admin})
    return user


def login(session: Session, username: str, password: str, now: int | None = None) -> LoginResponse:
    """
    Verify credentials and issue a token.

    Unknown username, wrong password and over-long credentials raise the same
    ApiError(WRONG_CREDENTIALS), each after one Argon2 verify.
    On success last_login_time is updated (and the hash upgraded if the hasher
    parameters changed) in the same commit as the token insert.
    """
    oversized = len(username) > USERNAME_MAX_LEN or len(password) > PASSWORD_MAX_LEN
    user = None if oversized else find_user_by_username(session, username)
    if user is None:
        verify_password(password[:PASSWORD_MAX_LEN], _DUMMY_HASH)
        raise ApiError(ErrorKind.WRONG_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        raise ApiError(ErrorKind.WRONG_CREDENTIALS)

    logged_in = now_millis() if now is None else now
    user.last_login_time = logged_in
    if needs_rehash(user.password_hash):
        user.password_hash = _hash_or_fail(password)
    return issue_token(session, user.user_id, now=logged_in)


def delete_user(session: Session, user_id: int) -> bool:
    """Delete a user and their tokens. Returns False if no such user."""
    try:
        user = session.query(User).filter(User.user_id == user_id).first()
        if user is None:
            return False
        session.query(Token).filter(Token.user_id == user_id).delete(synchronize_session=False)
        session.delete(user)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise _store_failure("User delete failed", user_id=user_id)
    logger.info("User deleted", extra={"user_id": user_id})
    return True
