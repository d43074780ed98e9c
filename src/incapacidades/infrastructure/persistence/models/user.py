"""SQLAlchemy model for the users table."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column

from incapacidades.domain.entities import Role, User
from incapacidades.infrastructure.persistence.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key (UUID string).
        email: Login email, unique across active and inactive users.
        password_hash: Argon2 hash of the password.
        full_name: Display name.
        national_id: National ID ("cedula"), unique.
        phone: Optional contact number.
        role: ADMIN or USER.
        is_active: False once the user has been soft-deleted.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
        last_login: Timestamp of last successful login.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="User ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    national_id: Mapped[str] = mapped_column(
        "cedula",
        String(10),
        nullable=False,
        unique=True,
        index=True,
        comment="National identification number",
    )
    phone: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", native_enum=False, length=16),
        nullable=False,
        default=Role.USER,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the user can log in",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of last successful login",
    )

    def to_entity(self) -> User:
        """Convert to the domain entity."""
        return User(
            id=self.id,
            email=self.email,
            password_hash=self.password_hash,
            full_name=self.full_name,
            national_id=self.national_id,
            role=self.role,
            phone=self.phone,
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
            last_login=self.last_login,
        )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
