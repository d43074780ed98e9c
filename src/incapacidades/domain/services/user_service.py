"""User management service.

Profile lookups, paginated listing, updates, and soft deletion. Removing a
user only clears ``is_active``; the record and its unique email and
national ID stay reserved.
"""

import math
from dataclasses import dataclass, fields

from sqlalchemy.exc import IntegrityError

from incapacidades.core.exceptions import ConflictError, NotFoundError
from incapacidades.core.logging import get_logger
from incapacidades.domain.entities import PublicUser, Role
from incapacidades.infrastructure.auth import PasswordHasher
from incapacidades.infrastructure.persistence.models import UserModel
from incapacidades.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class Page:
    """One page of users."""

    items: list[PublicUser]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass(frozen=True)
class UserUpdate:
    """Fields to change on a user. ``None`` means leave unchanged."""

    email: str | None = None
    password: str | None = None
    full_name: str | None = None
    national_id: str | None = None
    phone: str | None = None
    role: Role | None = None
    is_active: bool | None = None

    def changed_fields(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]


class UserService:
    """Business logic for user management."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher) -> None:
        self.users = users
        self.hasher = hasher

    async def _get_model(self, user_id: str) -> UserModel:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self, page: int = 1, limit: int = 10) -> Page:
        """List users, newest first."""
        models, total = await self.users.get_paginated(page=page, page_size=limit)
        return Page(
            items=[m.to_entity().to_public() for m in models],
            page=page,
            limit=limit,
            total=total,
        )

    async def get_user(self, user_id: str) -> PublicUser:
        """Get a user by ID.

        Raises:
            NotFoundError: If no user has this ID.
        """
        user = await self._get_model(user_id)
        return user.to_entity().to_public()

    async def update_user(self, user_id: str, changes: UserUpdate) -> PublicUser:
        """Apply changes to a user.

        Raises:
            NotFoundError: If no user has this ID.
            ConflictError: If the new email or national ID is taken.
        """
        user = await self._get_model(user_id)

        if changes.email is not None and changes.email != user.email:
            if await self.users.email_exists(changes.email):
                raise ConflictError("Email is already registered", field="email")
            user.email = changes.email

        if changes.national_id is not None and changes.national_id != user.national_id:
            if await self.users.national_id_exists(changes.national_id):
                raise ConflictError("National ID is already registered", field="national_id")
            user.national_id = changes.national_id

        if changes.password is not None:
            user.password_hash = await self.hasher.hash_async(changes.password)
        if changes.full_name is not None:
            user.full_name = changes.full_name
        if changes.phone is not None:
            user.phone = changes.phone
        if changes.role is not None:
            user.role = Role(changes.role)
        if changes.is_active is not None:
            user.is_active = changes.is_active

        try:
            await self.users.save(user)
            await self.users.commit()
        except IntegrityError as e:
            await self.users.rollback()
            raise ConflictError("Email or national ID is already registered") from e

        logger.info("User updated", user_id=user_id, fields=changes.changed_fields())
        return user.to_entity().to_public()

    async def deactivate_user(self, user_id: str) -> None:
        """Soft delete a user by clearing ``is_active``.

        Raises:
            NotFoundError: If no user has this ID.
        """
        user = await self._get_model(user_id)
        user.is_active = False
        await self.users.save(user)
        await self.users.commit()
        logger.info("User deactivated", user_id=user_id)
