"""User repository for database operations."""

from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from incapacidades.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations.

    This is the credential store: users are looked up by ID and by email,
    and uniqueness of email and national ID is enforced by the database.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Raises:
            sqlalchemy.exc.IntegrityError: If email or national ID is taken.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def save(self, user: UserModel) -> UserModel:
        """Flush pending changes on an already loaded user."""
        await self.session.flush()
        return user

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self.session.rollback()

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by exact email, active or not."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def national_id_exists(self, national_id: str) -> bool:
        """Check if a national ID is already registered."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.national_id == national_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def update_last_login(self, user_id: str) -> None:
        """Update the last_login timestamp for a user."""
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(last_login=datetime.now(timezone.utc))
        )
        await self.session.flush()

    async def count_all(self) -> int:
        """Count all users, active or not."""
        result = await self.session.execute(select(func.count(UserModel.id)))
        return result.scalar_one() or 0

    async def get_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
    ) -> tuple[list[UserModel], int]:
        """Get a page of users, newest first.

        Args:
            page: Page number (1-indexed).
            page_size: Number of items per page.

        Returns:
            Tuple of (list of users, total count).
        """
        total = await self.count_all()

        offset = (page - 1) * page_size
        result = await self.session.execute(
            select(UserModel)
            .order_by(UserModel.created_at.desc(), UserModel.id)
            .offset(offset)
            .limit(page_size)
        )
        return list(result.scalars().all()), total
