"""Bearer token authorization guard.

Endpoints declare an ``AccessPolicy`` and depend on an
``AuthorizationGuard`` built from it. The guard verifies the access token,
reloads the subject from the database, and checks the fresh role against
the policy. Role changes and deactivation therefore take effect on the
next request, without waiting for the token to expire.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header

from incapacidades.core.exceptions import ForbiddenError, UnauthorizedError
from incapacidades.core.logging import get_logger
from incapacidades.domain.entities import PublicUser, Role
from incapacidades.infrastructure.api.dependencies import UserRepo
from incapacidades.infrastructure.auth import (
    InvalidTokenError,
    TokenClaims,
    TokenExpiredError,
    jwt_service,
)

logger = get_logger(__name__)

INVALID_TOKEN = "Invalid or missing token"


@dataclass(frozen=True)
class AccessPolicy:
    """Roles allowed to reach an endpoint. ``None`` admits any authenticated user."""

    roles: frozenset[Role] | None = None

    def allows(self, role: Role) -> bool:
        return self.roles is None or role in self.roles


AUTHENTICATED = AccessPolicy()
ADMIN_ONLY = AccessPolicy(roles=frozenset({Role.ADMIN}))


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from a ``Bearer <token>`` header value."""
    if authorization is None:
        raise UnauthorizedError(INVALID_TOKEN)

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError(INVALID_TOKEN)
    return parts[1]


class AuthorizationGuard:
    """FastAPI dependency enforcing an access policy.

    Usage:
        @router.get("", dependencies=[Depends(AuthorizationGuard(ADMIN_ONLY))])
    """

    def __init__(self, policy: AccessPolicy = AUTHENTICATED) -> None:
        self.policy = policy

    async def __call__(
        self,
        users: UserRepo,
        authorization: Annotated[str | None, Header()] = None,
    ) -> PublicUser:
        token = extract_bearer_token(authorization)
        claims = self._verify(token)

        user = await users.get_by_id(claims.subject)
        if user is None:
            logger.info("Authorization failed: unknown subject", user_id=claims.subject)
            raise UnauthorizedError(INVALID_TOKEN)
        if not user.is_active:
            logger.info("Authorization failed: inactive user", user_id=user.id)
            raise UnauthorizedError(INVALID_TOKEN)

        current = user.to_entity().to_public()
        if not self.policy.allows(current.role):
            logger.info(
                "Authorization failed: insufficient role",
                user_id=current.id,
                role=current.role.value,
            )
            raise ForbiddenError("Insufficient permissions")

        return current

    @staticmethod
    def _verify(token: str) -> TokenClaims:
        try:
            return jwt_service.validate_access_token(token)
        except TokenExpiredError as e:
            logger.info("Authorization failed: token expired")
            raise UnauthorizedError(INVALID_TOKEN) from e
        except InvalidTokenError as e:
            logger.info("Authorization failed: invalid token", error=str(e))
            raise UnauthorizedError(INVALID_TOKEN) from e


CurrentUser = Annotated[PublicUser, Depends(AuthorizationGuard(AUTHENTICATED))]
AdminUser = Annotated[PublicUser, Depends(AuthorizationGuard(ADMIN_ONLY))]
