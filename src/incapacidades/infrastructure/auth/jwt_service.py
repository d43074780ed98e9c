"""JWT token service.

Creates and verifies signed, time-limited access and refresh tokens. The two
token kinds are signed with different secrets and are never interchangeable:
an access token does not verify as a refresh token and vice versa.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from incapacidades.core.config import get_settings
from incapacidades.infrastructure.auth.token_types import (
    TokenClaims,
    TokenPair,
    TokenType,
)

REQUIRED_CLAIMS = ["exp", "iat", "sub", "jti", "iss"]


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for creating and validating JWT tokens.

    Secrets and lifetimes default to the configured settings and can be
    overridden per instance.
    """

    def __init__(
        self,
        access_secret: str | None = None,
        refresh_secret: str | None = None,
        access_ttl: timedelta | None = None,
        refresh_ttl: timedelta | None = None,
    ) -> None:
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl

    @property
    def access_secret(self) -> str:
        return self._access_secret or get_settings().access_token_secret

    @property
    def refresh_secret(self) -> str:
        return self._refresh_secret or get_settings().refresh_token_secret

    @property
    def access_ttl(self) -> timedelta:
        if self._access_ttl is not None:
            return self._access_ttl
        return timedelta(minutes=get_settings().access_token_expire_minutes)

    @property
    def refresh_ttl(self) -> timedelta:
        if self._refresh_ttl is not None:
            return self._refresh_ttl
        return timedelta(days=get_settings().refresh_token_expire_days)

    @property
    def algorithm(self) -> str:
        return get_settings().jwt_algorithm

    @property
    def issuer(self) -> str:
        return get_settings().jwt_issuer

    def _encode(
        self,
        token_type: TokenType,
        user_id: str,
        email: str,
        role: str,
        secret: str,
        expires_delta: timedelta,
        now: datetime | None,
    ) -> tuple[str, str]:
        issued_at = now or datetime.now(timezone.utc)
        token_id = str(uuid.uuid4())
        payload = {
            "iss": self.issuer,
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + expires_delta,
            "jti": token_id,
            "email": email,
            "role": role,
            "type": token_type.value,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm), token_id

    def create_access_token(
        self,
        user_id: str,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
        now: datetime | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: The user's unique identifier (``sub`` claim).
            email: The user's email address.
            role: The user's role name.
            expires_delta: Custom lifetime. Defaults to the configured TTL.
            now: Issue time. Defaults to the current time.

        Returns:
            Encoded JWT access token.
        """
        token, _ = self._encode(
            TokenType.ACCESS,
            user_id,
            email,
            role,
            self.access_secret,
            expires_delta or self.access_ttl,
            now,
        )
        return token

    def create_refresh_token(
        self,
        user_id: str,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
        now: datetime | None = None,
    ) -> tuple[str, str]:
        """Create a refresh token signed with the refresh secret.

        Returns:
            Tuple of (encoded JWT refresh token, token ID for revocation).
        """
        return self._encode(
            TokenType.REFRESH,
            user_id,
            email,
            role,
            self.refresh_secret,
            expires_delta or self.refresh_ttl,
            now,
        )

    def create_token_pair(self, user_id: str, email: str, role: str) -> TokenPair:
        """Mint a fresh access/refresh pair for the same claim set."""
        access_token = self.create_access_token(user_id, email, role)
        refresh_token, _ = self.create_refresh_token(user_id, email, role)
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.get_expires_in(),
        )

    def _decode(self, token: str, secret: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def _validate(self, token: str, secret: str, expected: TokenType) -> TokenClaims:
        payload = self._decode(token, secret)
        if payload.get("type") != expected.value:
            raise InvalidTokenError(f"Expected token type {expected.value!r}")
        try:
            return TokenClaims.from_payload(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError("Malformed token claims") from e

    def validate_access_token(self, token: str) -> TokenClaims:
        """Verify an access token with the access secret.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not an access token.
        """
        return self._validate(token, self.access_secret, TokenType.ACCESS)

    def validate_refresh_token(self, token: str) -> TokenClaims:
        """Verify a refresh token with the refresh secret.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not a refresh token.
        """
        return self._validate(token, self.refresh_secret, TokenType.REFRESH)

    def get_expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return int(self.access_ttl.total_seconds())


# Default JWT service instance
jwt_service = JWTService()
