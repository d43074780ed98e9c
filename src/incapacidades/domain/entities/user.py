"""User entity and its public projection.

Users are uniquely identified by email and by national ID ("cedula").
Removing a user is a soft delete: ``is_active`` is cleared and the record
is kept.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Role(str, Enum):
    """Coarse-grained permission tier used for authorization decisions."""

    ADMIN = "ADMIN"
    USER = "USER"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PublicUser:
    """Outward projection of a user. Never carries the password hash."""

    id: str
    email: str
    full_name: str
    national_id: str
    role: Role
    is_active: bool
    phone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login: datetime | None = None


@dataclass
class User:
    """User entity.

    Attributes:
        id: Unique identifier (UUID string), immutable.
        email: Login key, unique across live and inactive users.
        password_hash: Salted one-way hash (never store plaintext).
        full_name: Display name.
        national_id: National identification number, unique.
        role: Role used by the authorization guard.
        phone: Optional contact number.
        is_active: False once the user has been soft-deleted.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
        last_login: Timestamp of last successful login (nullable).
    """

    id: str
    email: str
    password_hash: str
    full_name: str
    national_id: str
    role: Role = Role.USER
    phone: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    last_login: datetime | None = None

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User ID is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
        if not self.national_id:
            raise ValueError("National ID is required")
        if not self.role:
            raise ValueError("Role is required")
        self.role = Role(self.role)

    def to_public(self) -> PublicUser:
        """Project the user without its password hash."""
        return PublicUser(
            id=self.id,
            email=self.email,
            full_name=self.full_name,
            national_id=self.national_id,
            role=self.role,
            is_active=self.is_active,
            phone=self.phone,
            created_at=self.created_at,
            updated_at=self.updated_at,
            last_login=self.last_login,
        )
