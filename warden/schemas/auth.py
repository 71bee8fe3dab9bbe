"""Request/response schemas for login and the authenticated principal."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """Credentials for login. No length limits here: any bad value is just wrong credentials (401)."""

    username: str = Field(..., description="Username (case-insensitive)")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Opaque token returned after successful login. Send it back in the Token header."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: int
    token_string: str


class Principal(BaseModel):
    """Authenticated identity for the current request, resolved fresh on every validation."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    is_admin: bool
