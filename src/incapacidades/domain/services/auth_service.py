"""Authentication service.

The sole writer of authentication-relevant user fields and the sole minter
of token pairs. Handles registration, credential validation, login, token
refresh with rotation, and logout.

Security:
- Credential validation collapses "unknown email", "wrong password" and
  "inactive account" into the same ``None`` result, and verifies against a
  dummy hash when the email is unknown so the timing matches.
- Refresh failures all raise the same generic ``UnauthorizedError``.
- Passwords and tokens are never logged.
"""

import uuid
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from incapacidades.core.config import get_settings
from incapacidades.core.exceptions import ConflictError, UnauthorizedError
from incapacidades.core.logging import get_logger
from incapacidades.domain.entities import PublicUser, Role
from incapacidades.infrastructure.auth import (
    InvalidTokenError,
    JWTService,
    PasswordHasher,
    TokenClaims,
    TokenExpiredError,
    TokenPair,
    TokenType,
    get_password_hasher,
    jwt_service,
)
from incapacidades.infrastructure.persistence.models import UserModel
from incapacidades.infrastructure.persistence.repositories import (
    TokenBlacklistRepository,
    UserRepository,
)

logger = get_logger(__name__)

INVALID_REFRESH_TOKEN = "Invalid refresh token"


@dataclass(frozen=True)
class AuthResult:
    """A user's public projection together with a freshly minted token pair."""

    user: PublicUser
    tokens: TokenPair


class AuthService:
    """Registration, credential validation, and token lifecycle.

    Args:
        users: Credential store.
        hasher: Password hasher.
        tokens: Token issuer.
        blacklist: Optional denylist of revoked refresh token IDs. When
            omitted, refresh tokens stay valid for their whole lifetime.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: JWTService,
        blacklist: TokenBlacklistRepository | None = None,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.blacklist = blacklist

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        national_id: str,
        phone: str | None = None,
    ) -> AuthResult:
        """Register a new user with the USER role.

        Raises:
            ConflictError: If the email or national ID is already registered.
        """
        if await self.users.email_exists(email):
            logger.info("Registration failed: email exists", email=email)
            raise ConflictError("Email is already registered", field="email")

        if await self.users.national_id_exists(national_id):
            logger.info("Registration failed: national ID exists", email=email)
            raise ConflictError("National ID is already registered", field="national_id")

        password_hash = await self.hasher.hash_async(password)

        user = UserModel(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            national_id=national_id,
            phone=phone,
            role=Role.USER,
            is_active=True,
        )
        try:
            await self.users.create(user)
            await self.users.commit()
        except IntegrityError as e:
            # A concurrent registration won the unique constraint race
            await self.users.rollback()
            logger.info("Registration failed: unique constraint", email=email)
            raise ConflictError("Email or national ID is already registered") from e

        public_user = user.to_entity().to_public()
        logger.info("User registered", user_id=public_user.id, email=email)

        return AuthResult(user=public_user, tokens=self.generate_token_pair(public_user))

    async def validate_credentials(self, email: str, password: str) -> PublicUser | None:
        """Check an email/password pair.

        Returns:
            The user's public projection, or None when the email is unknown,
            the account is inactive, or the password does not match.
        """
        user = await self.users.get_by_email(email)

        if user is None:
            await self.hasher.verify_async(password, self.hasher.dummy_hash)
            logger.info("Credential check failed: unknown email")
            return None

        password_ok = await self.hasher.verify_async(password, user.password_hash)

        if not user.is_active:
            logger.info("Credential check failed: inactive user", user_id=user.id)
            return None

        if not password_ok:
            logger.info("Credential check failed: invalid password", user_id=user.id)
            return None

        if self.hasher.needs_rehash(user.password_hash):
            user.password_hash = await self.hasher.hash_async(password)
            await self.users.save(user)
            await self.users.commit()
            logger.info("Password hash upgraded", user_id=user.id)

        return user.to_entity().to_public()

    async def login(self, user: PublicUser) -> AuthResult:
        """Mint a token pair for an already validated user.

        Performs no credential re-validation; callers must have obtained
        ``user`` from ``validate_credentials``.
        """
        await self.users.update_last_login(user.id)
        await self.users.commit()

        logger.info("User logged in", user_id=user.id, email=user.email)
        return AuthResult(user=user, tokens=self.generate_token_pair(user))

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange a valid refresh token for a brand-new pair.

        The presented token is verified with the refresh secret only. When a
        denylist is configured, the presented token is revoked so it cannot
        be used twice, and entries for tokens that have expired anyway are
        purged.

        Raises:
            UnauthorizedError: If the token is invalid, expired, revoked, or
                its subject no longer exists or is inactive.
        """
        claims = self._verify_refresh_token(refresh_token)

        if self.blacklist is not None and await self.blacklist.is_revoked(claims.token_id):
            logger.warning(
                "Refresh failed: token already revoked",
                user_id=claims.subject,
                token_id=claims.token_id,
            )
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        user = await self.users.get_by_id(claims.subject)
        if user is None or not user.is_active:
            logger.info("Refresh failed: subject unavailable", user_id=claims.subject)
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        if self.blacklist is not None:
            try:
                await self.blacklist.revoke(
                    token_id=claims.token_id,
                    token_type=TokenType.REFRESH.value,
                    user_id=claims.subject,
                    expires_at=claims.expires_at,
                    reason="rotated",
                )
                await self.blacklist.purge_expired()
                await self.users.commit()
            except IntegrityError as e:
                # Another request consumed the same token first
                await self.users.rollback()
                raise UnauthorizedError(INVALID_REFRESH_TOKEN) from e

        logger.info("Tokens refreshed", user_id=user.id)
        return self.generate_token_pair(user.to_entity().to_public())

    async def logout(self, refresh_token: str) -> None:
        """Revoke a refresh token and purge expired denylist entries.

        Invalid or already revoked tokens are ignored.
        """
        if self.blacklist is None:
            return

        try:
            claims = self.tokens.validate_refresh_token(refresh_token)
        except (TokenExpiredError, InvalidTokenError):
            return

        revoked = await self.blacklist.revoke(
            token_id=claims.token_id,
            token_type=TokenType.REFRESH.value,
            user_id=claims.subject,
            expires_at=claims.expires_at,
            reason="logout",
        )
        if revoked:
            await self.blacklist.purge_expired()
            await self.users.commit()
            logger.info("User logged out", user_id=claims.subject)

    def generate_token_pair(self, user: PublicUser) -> TokenPair:
        """Sign an access/refresh pair carrying ``{sub, email, role}``."""
        return self.tokens.create_token_pair(
            user_id=user.id,
            email=user.email,
            role=Role(user.role).value,
        )

    def _verify_refresh_token(self, refresh_token: str) -> TokenClaims:
        try:
            return self.tokens.validate_refresh_token(refresh_token)
        except TokenExpiredError as e:
            logger.info("Refresh failed: token expired")
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from e
        except InvalidTokenError as e:
            logger.info("Refresh failed: invalid token", error=str(e))
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from e


def build_auth_service(
    users: UserRepository,
    blacklist: TokenBlacklistRepository | None = None,
    hasher: PasswordHasher | None = None,
    tokens: JWTService | None = None,
) -> AuthService:
    """Wire an AuthService with the default hasher and token issuer.

    The denylist is dropped when revocation is disabled in settings.
    """
    if not get_settings().refresh_token_revocation_enabled:
        blacklist = None

    return AuthService(
        users=users,
        hasher=hasher or get_password_hasher(),
        tokens=tokens or jwt_service,
        blacklist=blacklist,
    )
