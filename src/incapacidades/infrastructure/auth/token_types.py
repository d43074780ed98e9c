"""Token types and claim models."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class TokenType(str, Enum):
    """Kinds of JWT issued by the API."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims carried by an access or refresh token."""

    subject: str
    email: str
    role: str
    token_type: TokenType
    token_id: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenClaims":
        """Build claims from a decoded JWT payload.

        Raises:
            KeyError: If a required claim is missing.
            ValueError: If the token type is unknown.
        """
        return cls(
            subject=payload["sub"],
            email=payload["email"],
            role=payload["role"],
            token_type=TokenType(payload["type"]),
            token_id=payload["jti"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


@dataclass(frozen=True)
class TokenPair:
    """An access token and the refresh token minted alongside it."""

    access_token: str
    refresh_token: str
    expires_in: int
