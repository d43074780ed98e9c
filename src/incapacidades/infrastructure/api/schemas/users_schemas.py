"""Pydantic schemas for user endpoints."""

from datetime import datetime

from pydantic import AliasChoices, EmailStr, Field, field_validator

from incapacidades.domain.entities import Role
from incapacidades.domain.services import default_password_validator, is_valid_national_id
from incapacidades.infrastructure.api.schemas.base import CamelModel


def check_password_strength(password: str) -> str:
    """Raise ValueError listing every unmet password rule."""
    errors = default_password_validator.validate(password)
    if errors:
        raise ValueError("; ".join(e.message for e in errors))
    return password


def check_national_id(national_id: str) -> str:
    national_id = national_id.strip()
    if not is_valid_national_id(national_id):
        raise ValueError("National ID must be 6 to 10 digits")
    return national_id


class UserResponse(CamelModel):
    """Public user information. Never includes the password hash."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    full_name: str = Field(..., description="User's full name")
    national_id: str = Field(..., description="National identification number (cedula)")
    phone: str | None = Field(None, description="Contact phone number")
    role: Role = Field(..., description="User's role")
    is_active: bool = Field(..., description="Whether the user can log in")
    created_at: datetime | None = Field(None, description="When the user was created")
    updated_at: datetime | None = Field(None, description="When the user was last updated")
    last_login: datetime | None = Field(None, description="Last successful login")


class UserUpdateRequest(CamelModel):
    """Request body for updating a user.

    All fields are optional. Only provided fields are changed. Role and
    active status can only be changed by administrators.
    """

    email: EmailStr | None = Field(None, description="User's email address")
    password: str | None = Field(None, description="New password")
    full_name: str | None = Field(None, min_length=1, max_length=255)
    national_id: str | None = Field(
        None,
        validation_alias=AliasChoices("nationalId", "national_id", "cedula"),
        description="National identification number (cedula)",
    )
    phone: str | None = Field(None, max_length=20)
    role: Role | None = Field(None, description="User's role (admin only)")
    is_active: bool | None = Field(None, description="Whether the user can log in (admin only)")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return None if v is None else check_password_strength(v)

    @field_validator("national_id")
    @classmethod
    def validate_national_id(cls, v: str | None) -> str | None:
        return None if v is None else check_national_id(v)


class PaginationMeta(CamelModel):
    """Pagination details for list responses."""

    page: int
    limit: int
    total: int
    total_pages: int


class UserListResponse(CamelModel):
    """Paginated list of users."""

    data: list[UserResponse]
    meta: PaginationMeta


class MessageResponse(CamelModel):
    """Simple confirmation message."""

    message: str
