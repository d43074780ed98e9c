"""Domain entities.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from incapacidades.domain.entities.user import PublicUser, Role, User

__all__ = [
    "PublicUser",
    "Role",
    "User",
]
