"""Authentication infrastructure components.

This module provides password hashing and JWT token services.
"""

from incapacidades.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from incapacidades.infrastructure.auth.password_hasher import (
    PasswordHasher,
    get_password_hasher,
)
from incapacidades.infrastructure.auth.token_types import (
    TokenClaims,
    TokenPair,
    TokenType,
)

__all__ = [
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "PasswordHasher",
    "TokenClaims",
    "TokenExpiredError",
    "TokenPair",
    "TokenType",
    "get_password_hasher",
    "jwt_service",
]
