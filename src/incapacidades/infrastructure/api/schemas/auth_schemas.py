"""Pydantic schemas for authentication endpoints."""

from pydantic import AliasChoices, EmailStr, Field, field_validator

from incapacidades.infrastructure.api.schemas.base import CamelModel
from incapacidades.infrastructure.api.schemas.users_schemas import (
    UserResponse,
    check_national_id,
    check_password_strength,
)


class RegisterRequest(CamelModel):
    """Request body for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")
    full_name: str = Field(..., min_length=1, max_length=255, description="User's full name")
    national_id: str = Field(
        ...,
        validation_alias=AliasChoices("nationalId", "national_id", "cedula"),
        description="National identification number (cedula), 6 to 10 digits",
    )
    phone: str | None = Field(None, max_length=20, description="Contact phone number")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_strength(v)

    @field_validator("national_id")
    @classmethod
    def validate_national_id(cls, v: str) -> str:
        return check_national_id(v)


class LoginRequest(CamelModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class RefreshTokenRequest(CamelModel):
    """Request body for token refresh and logout."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class TokenResponse(CamelModel):
    """A freshly minted token pair."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    expires_in: int = Field(..., description="Access token expiration time in seconds")


class AuthResponse(TokenResponse):
    """Response for successful registration or login."""

    user: UserResponse = Field(..., description="User information")
