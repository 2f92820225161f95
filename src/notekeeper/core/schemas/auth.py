"""
Authentication request schemas.
"""

import re

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import CamelModel

NAME_PATTERN = re.compile(r"^[a-zA-Z\s-]+$")
SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&()_+{}\[\]:;<>,.?~|]")

# (pattern, message) pairs; every failing rule is reported, after the length check
PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password should contain capital letters"),
    (SPECIAL_CHARACTERS, "Password should contain special characters"),
    (re.compile(r"\d"), "Password should contain numbers"),
    (re.compile(r"[a-z]"), "Password should contain small letters"),
)


def _normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value


class SignupRequest(CamelModel):
    """User registration request."""

    email: EmailStr = Field(description="Account email, used to log in")
    password: str = Field(description="Account password")
    first_name: str = Field(min_length=1, max_length=100, description="First name")
    last_name: str = Field(min_length=1, max_length=100, description="Last name")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not NAME_PATTERN.match(v):
            raise ValueError("Name can only contain letters, spaces and hyphens")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        failures = [message for pattern, message in PASSWORD_RULES if not pattern.search(v)]
        if len(v) < 8:
            failures.insert(0, "Password is too short - shoud be at least 8 characters")
        if failures:
            raise ValueError(", ".join(failures))
        return v

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "email": "jane.doe@example.com",
                "password": "Sup3r$ecret",
                "firstName": "Jane",
                "lastName": "Doe",
            }
        },
    )


class LoginRequest(CamelModel):
    """User login request."""

    email: str = Field(min_length=1, description="Account email")
    password: str = Field(min_length=1, description="Account password")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)
