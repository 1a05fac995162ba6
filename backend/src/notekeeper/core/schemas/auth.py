"""
Authentication schemas.

These define the API contracts for registration, login and access-token
refresh. Wire names are camelCase (``userId``, ``refreshToken``); Python
code uses snake_case attributes.
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..models.types import Role

# deliberately loose: one "@", no whitespace, a dot in the domain
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    """User registration request schema."""

    name: str = Field(min_length=1, max_length=100, description="Display name")
    email: str = Field(min_length=3, max_length=255, description="Unique email, matched exactly")
    password: str = Field(min_length=8, max_length=128, description="User password")
    role: Role = Field(default=Role.USER, description="USER or ADMIN, case-insensitive")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be blank")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        """Roles are stored upper-cased."""
        if v is None:
            return Role.USER
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ada",
                "email": "ada@example.com",
                "password": "securepassword123",
                "role": "user",
            }
        },
    )


class RegisterResponse(CamelModel):
    message: str = Field(default="User registered successfully")
    user_id: int = Field(description="New user id")
    token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="JWT refresh token")


class LoginRequest(CamelModel):
    """User login request schema."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "ada@example.com", "password": "securepassword123"}
        },
    )


class TokenResponse(CamelModel):
    """Tokens issued on login."""

    token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="JWT refresh token")


class RefreshTokenRequest(CamelModel):
    # optional so a missing token reaches the service and yields 401, not 400
    refresh_token: Optional[str] = Field(default=None, description="JWT refresh token")


class AccessTokenResponse(CamelModel):
    access_token: str = Field(description="Newly issued JWT access token")
