"""Request/response schemas for user endpoints. Field names are camelCase on the wire."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from warden.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, USERNAME_MIN_LEN


class NewUser(BaseModel):
    """Registration body. Password length is checked by the endpoint (400, not 422)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(..., max_length=PASSWORD_MAX_LEN, description="Password")
    email_address: str | None = Field(default=None, max_length=320)


class UserRead(BaseModel):
    """User record as returned to clients (no password hash)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    user_id: int
    username: str
    email_address: str | None = None
    creation_time: int
    last_login_time: int
    is_admin: bool


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[UserRead]
