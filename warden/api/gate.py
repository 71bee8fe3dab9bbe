"""Request gates: token authentication and the admin check layered on top of it.

Both are FastAPI dependencies, so they run before the route handler and a
raised ApiError means the handler is never called. Attach them per route or
per router with ``dependencies=[Depends(...)]``; require_admin depends on
authenticate, so declaring it alone gives both checks.
"""

from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from warden.core.context import AppContext, get_context
from warden.core.database import get_db
from warden.core.errors import ApiError, ErrorKind
from warden.core.security import is_well_formed_token
from warden.schemas.auth import Principal
from warden.services.tokens import validate_token


def extract_token(raw_headers: Iterable[tuple[bytes, bytes]], header_name: str) -> str:
    """
    Read the token header from raw ASGI headers.

    Raises ApiError(MISSING_TOKEN) if absent and ApiError(BAD_TOKEN_FORMAT) if the
    value is not plain ASCII or contains characters a token never has.
    """
    wanted = header_name.lower().encode("latin-1")
    for name, value in raw_headers:
        if name.lower() != wanted:
            continue
        try:
            token = value.decode("ascii").strip()
        except UnicodeDecodeError:
            raise ApiError(ErrorKind.BAD_TOKEN_FORMAT)
        if not is_well_formed_token(token):
            raise ApiError(ErrorKind.BAD_TOKEN_FORMAT)
        return token
    raise ApiError(ErrorKind.MISSING_TOKEN)


def authenticate(
    request: Request,
    context: Annotated[AppContext, Depends(get_context)],
    db: Annotated[Session, Depends(get_db)],
) -> Principal:
    """Dependency: require a valid token; attach and return the caller's Principal."""
    token = extract_token(request.scope["headers"], context.settings.TOKEN_HEADER)
    principal = validate_token(db, token, context.settings.TOKEN_VALID_DURATION_MILLIS)
    request.state.principal = principal
    return principal


def require_admin(
    principal: Annotated[Principal, Depends(authenticate)],
) -> Principal:
    """Dependency: require an authenticated principal with is_admin. Non-admins get 401."""
    if not principal.is_admin:
        raise ApiError(ErrorKind.UNAUTHORIZED)
    return principal


CurrentPrincipal = Annotated[Principal, Depends(authenticate)]
