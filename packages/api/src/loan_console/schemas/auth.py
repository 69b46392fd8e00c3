# This project was developed with assistance from AI tools.
"""Authentication and authorization schemas."""

from lending.enums import UserRole
from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """Injected by auth middleware into every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: UserRole
    email: str
    name: str
    # Raw bearer token, forwarded to the backend on the caller's behalf.
    token: str | None = Field(default=None, exclude=True, repr=False)


class TokenPayload(BaseModel):
    """Decoded JWT token claims from the identity provider."""

    sub: str
    email: str = ""
    preferred_username: str = ""
    name: str = ""
    realm_access: dict = Field(default_factory=dict)
