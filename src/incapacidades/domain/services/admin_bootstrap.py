"""Bootstrapping of the default administrator.

The administrator is upserted: an existing user with the configured email
is promoted to ADMIN, reactivated, and given the configured password.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from incapacidades.core.config import Settings
from incapacidades.core.logging import get_logger
from incapacidades.domain.entities import PublicUser, Role
from incapacidades.domain.services.password_validator import default_password_validator
from incapacidades.infrastructure.auth import get_password_hasher
from incapacidades.infrastructure.persistence.models import UserModel
from incapacidades.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


class AdminBootstrapError(Exception):
    """Raised when the default administrator cannot be created."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


async def ensure_default_admin(
    session: AsyncSession,
    settings: Settings,
    email: str | None = None,
    password: str | None = None,
) -> tuple[bool, PublicUser]:
    """Create or update the default administrator.

    Args:
        session: Database session.
        settings: Provides the default admin's profile fields.
        email: Overrides ``settings.default_admin_email``.
        password: Overrides ``settings.default_admin_password``.

    Returns:
        Tuple of (created, user). ``created`` is False when an existing
        user was updated.

    Raises:
        AdminBootstrapError: If credentials are missing or the password is weak.
    """
    email = email or settings.default_admin_email
    password = password or settings.default_admin_password
    if not email or not password:
        raise AdminBootstrapError("Admin email and password are required")

    password_errors = default_password_validator.validate(password)
    if password_errors:
        messages = "; ".join(e.message for e in password_errors)
        raise AdminBootstrapError(f"Password validation failed: {messages}")

    users = UserRepository(session)
    password_hash = await get_password_hasher().hash_async(password)

    user = await users.get_by_email(email)
    created = user is None
    if user is None:
        if await users.national_id_exists(settings.default_admin_national_id):
            raise AdminBootstrapError(
                f"National ID {settings.default_admin_national_id} is already registered"
            )
        user = UserModel(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            full_name=settings.default_admin_full_name,
            national_id=settings.default_admin_national_id,
            phone=settings.default_admin_phone,
            role=Role.ADMIN,
            is_active=True,
        )
        await users.create(user)
    else:
        user.password_hash = password_hash
        user.role = Role.ADMIN
        user.is_active = True
        await users.save(user)

    await users.commit()
    logger.info("Default admin upserted", user_id=user.id, created=created)
    return created, user.to_entity().to_public()
