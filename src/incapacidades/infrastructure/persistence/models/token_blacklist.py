"""SQLAlchemy model for the token blacklist.

Holds the IDs (``jti``) of refresh tokens that were consumed by a refresh or
discarded by a logout, so they cannot mint new pairs again.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from incapacidades.infrastructure.persistence.database import Base


class TokenBlacklistModel(Base):
    """SQLAlchemy model for the token_blacklist table.

    Attributes:
        id: Primary key (token_id from the token payload).
        token_type: Type of the revoked token (currently always refresh).
        user_id: Subject of the revoked token.
        revoked_at: When the token was revoked.
        expires_at: Natural expiry of the token; rows past it can be purged.
        reason: Optional reason for revocation.
    """

    __tablename__ = "token_blacklist"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Token ID (jti)",
    )
    token_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
    )
    revoked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    reason: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<TokenBlacklist(id={self.id}, type={self.token_type})>"
