"""Persistence repositories for database operations."""

from incapacidades.infrastructure.persistence.repositories.token_blacklist_repository import (
    TokenBlacklistRepository,
)
from incapacidades.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "TokenBlacklistRepository",
    "UserRepository",
]
