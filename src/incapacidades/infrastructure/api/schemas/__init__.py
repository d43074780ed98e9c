"""API Schemas for request/response validation."""

from incapacidades.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
)
from incapacidades.infrastructure.api.schemas.base import CamelModel
from incapacidades.infrastructure.api.schemas.users_schemas import (
    MessageResponse,
    PaginationMeta,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "AuthResponse",
    "CamelModel",
    "LoginRequest",
    "MessageResponse",
    "PaginationMeta",
    "RefreshTokenRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserListResponse",
    "UserResponse",
    "UserUpdateRequest",
]
