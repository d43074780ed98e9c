"""SQLAlchemy models.

All models inherit from the Base class defined in database.py.
"""

from incapacidades.infrastructure.persistence.models.token_blacklist import (
    TokenBlacklistModel,
)
from incapacidades.infrastructure.persistence.models.user import UserModel

__all__ = [
    "TokenBlacklistModel",
    "UserModel",
]
