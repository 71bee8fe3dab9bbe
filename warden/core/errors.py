"""Failure kinds raised by the auth core and their HTTP rendering.

The kind says what went wrong; the HTTP status is looked up separately in
STATUS_BY_KIND so domain code never deals in status codes.
"""

import enum
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    BAD_TOKEN_FORMAT = "bad_token_format"
    MISSING_TOKEN = "missing_token"
    UNAUTHORIZED = "unauthorized"
    WRONG_CREDENTIALS = "wrong_credentials"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    INTERNAL_SERVER_ERROR = "internal_server_error"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_TOKEN_FORMAT: 400,
    ErrorKind.MISSING_TOKEN: 401,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.WRONG_CREDENTIALS: 401,
    ErrorKind.CONFLICT: 409,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL_SERVER_ERROR: 500,
}

# Public detail per kind. Missing, unknown, expired and under-privileged tokens
# all render the same body.
DEFAULT_DETAIL_BY_KIND: dict[ErrorKind, str] = {
    ErrorKind.BAD_TOKEN_FORMAT: "Malformed token header.",
    ErrorKind.MISSING_TOKEN: "Not authenticated",
    ErrorKind.UNAUTHORIZED: "Not authenticated",
    ErrorKind.WRONG_CREDENTIALS: "Invalid username or password.",
    ErrorKind.CONFLICT: "Conflict.",
    ErrorKind.BAD_REQUEST: "Bad request.",
    ErrorKind.NOT_FOUND: "Not found.",
    ErrorKind.INTERNAL_SERVER_ERROR: "Internal server error.",
}


class ApiError(Exception):
    """Raised by services and gates; rendered by api_error_handler."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or DEFAULT_DETAIL_BY_KIND[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ApiError as {"detail": ...} with the status mapped from its kind."""
    if exc.kind is ErrorKind.INTERNAL_SERVER_ERROR:
        logger.error(
            "Request failed with internal error",
            extra={"path": request.url.path, "method": request.method},
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
