"""Repository for revoked token IDs."""

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from incapacidades.infrastructure.persistence.models import TokenBlacklistModel


class TokenBlacklistRepository:
    """Repository for the token denylist."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def revoke(
        self,
        token_id: str,
        token_type: str,
        user_id: str,
        expires_at: datetime,
        reason: str | None = None,
    ) -> bool:
        """Add a token ID to the denylist.

        Returns:
            True if the token was newly revoked, False if it already was.
        """
        if await self._session.get(TokenBlacklistModel, token_id) is not None:
            return False

        self._session.add(
            TokenBlacklistModel(
                id=token_id,
                token_type=token_type,
                user_id=user_id,
                expires_at=expires_at,
                reason=reason,
            )
        )
        await self._session.flush()
        return True

    async def is_revoked(self, token_id: str) -> bool:
        """Check whether a token ID is on the denylist."""
        result = await self._session.execute(
            select(TokenBlacklistModel.id).where(TokenBlacklistModel.id == token_id)
        )
        return result.scalar_one_or_none() is not None

    async def purge_expired(self, now: datetime | None = None) -> int:
        """Delete entries whose tokens have expired on their own.

        Returns:
            Number of rows removed.
        """
        cutoff = now or datetime.now(timezone.utc)
        result = await self._session.execute(
            delete(TokenBlacklistModel).where(TokenBlacklistModel.expires_at < cutoff)
        )
        await self._session.flush()
        return result.rowcount
