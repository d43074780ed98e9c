"""FastAPI dependencies for services and credential checks."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from incapacidades.core.exceptions import UnauthorizedError
from incapacidades.core.logging import get_logger
from incapacidades.domain.entities import PublicUser
from incapacidades.domain.services import AuthService, UserService, build_auth_service
from incapacidades.infrastructure.api.schemas import LoginRequest
from incapacidades.infrastructure.auth import get_password_hasher
from incapacidades.infrastructure.persistence.database import get_db_session
from incapacidades.infrastructure.persistence.repositories import (
    TokenBlacklistRepository,
    UserRepository,
)

logger = get_logger(__name__)


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserRepository:
    """Get the user repository."""
    return UserRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    users: UserRepo,
) -> AuthService:
    """Get the authentication service bound to the request session."""
    return build_auth_service(users=users, blacklist=TokenBlacklistRepository(session))


def get_user_service(users: UserRepo) -> UserService:
    """Get the user management service."""
    return UserService(users=users, hasher=get_password_hasher())


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


async def get_validated_user(
    credentials: LoginRequest,
    auth_service: AuthServiceDep,
) -> PublicUser:
    """Check the email/password in the request body.

    Raises:
        UnauthorizedError: With the same message whatever the cause.
    """
    user = await auth_service.validate_credentials(credentials.email, credentials.password)
    if user is None:
        raise UnauthorizedError("Invalid credentials")
    return user


ValidatedUser = Annotated[PublicUser, Depends(get_validated_user)]
