"""Token issuance and validation against the token store.

A token is looked up together with its owner's current is_admin flag, so a
privilege change applies on the very next request. Unknown and expired tokens
produce the same Unauthorized error; only the debug log tells them apart.
"""

import enum
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from warden.core.errors import ApiError, ErrorKind
from warden.core.security import generate_token_string, now_millis
from warden.models import Token, User
from warden.schemas.auth import LoginResponse, Principal

logger = logging.getLogger(__name__)


class TokenState(enum.Enum):
    UNKNOWN = "unknown"
    VALID = "valid"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TokenRecord:
    """A token row joined with its owner's current privilege flag."""

    user_id: int
    creation_time: int
    is_admin: bool


def issue_token(session: Session, user_id: int, now: int | None = None) -> LoginResponse:
    """Mint a token for user_id and persist it. One insert, no retry."""
    token_string = generate_token_string()
    created = now_millis() if now is None else now
    try:
        session.add(Token(token_string=token_string, user_id=user_id, creation_time=created))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to persist token", extra={"user_id": user_id})
        raise ApiError(ErrorKind.INTERNAL_SERVER_ERROR)
    logger.info("Token issued", extra={"user_id": user_id})
    return LoginResponse(user_id=user_id, token_string=token_string)


def find_token_with_owner_admin_flag(session: Session, token_string: str) -> TokenRecord | None:
    """Return the token's owner and the owner's current is_admin, or None if no such token."""
    row = (
        session.query(Token.user_id, Token.creation_time, User.is_admin)
        .join(User, User.user_id == Token.user_id)
        .filter(Token.token_string == token_string)
        .first()
    )
    if row is None:
        return None
    return TokenRecord(user_id=row.user_id, creation_time=row.creation_time, is_admin=bool(row.is_admin))


def classify_token(record: TokenRecord | None, ttl_millis: int, now: int) -> TokenState:
    """Valid while now - creation_time <= ttl_millis (inclusive)."""
    if record is None:
        return TokenState.UNKNOWN
    if now - record.creation_time > ttl_millis:
        return TokenState.EXPIRED
    return TokenState.VALID


def validate_token(
    session: Session,
    token_string: str,
    ttl_millis: int,
    now: int | None = None,
) -> Principal:
    """
    Resolve token_string to a Principal.

    Raises ApiError(UNAUTHORIZED) for unknown or expired tokens and
    ApiError(INTERNAL_SERVER_ERROR) if the store lookup itself fails.
    """
    try:
        record = find_token_with_owner_admin_flag(session, token_string)
    except SQLAlchemyError:
        logger.exception("Token lookup failed")
        raise ApiError(ErrorKind.INTERNAL_SERVER_ERROR)

    state = classify_token(record, ttl_millis, now_millis() if now is None else now)
    if state is not TokenState.VALID:
        logger.debug("Token rejected", extra={"token_state": state.value})
        raise ApiError(ErrorKind.UNAUTHORIZED)
    return Principal(user_id=record.user_id, is_admin=record.is_admin)
