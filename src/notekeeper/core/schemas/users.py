"""User representation returned to clients."""

import uuid
from datetime import datetime

from pydantic import ConfigDict, Field

from .common import CamelModel


class UserResponse(CamelModel):
    """User profile without credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(description="User unique identifier")
    email: str = Field(description="Account email")
    first_name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    created_at: datetime = Field(description="Registration timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class TokenPair(CamelModel):
    """Tokens returned on login."""

    access_token: str
    refresh_token: str


class AccessToken(CamelModel):
    """Token returned on refresh."""

    access_token: str
