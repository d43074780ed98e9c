"""Password hashing using Argon2.

Provides salted, deliberately slow password hashing and verification using
the Argon2id algorithm. Hashing is CPU-bound, so the async variants run it in
a worker thread to keep the event loop responsive.
"""

import asyncio
import secrets

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError

from incapacidades.core.config import get_settings


class PasswordHasher:
    """Wraps an Argon2id hasher configured from settings.

    Example:
        >>> hasher = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)
        >>> hashed = hasher.hash("Passw0rd")
        >>> hasher.verify("Passw0rd", hashed)
        True
        >>> hasher.verify("wrong", hashed)
        False
    """

    def __init__(
        self,
        time_cost: int | None = None,
        memory_cost: int | None = None,
        parallelism: int | None = None,
    ) -> None:
        settings = get_settings()
        self._hasher = Argon2Hasher(
            time_cost=time_cost or settings.password_hash_time_cost,
            memory_cost=memory_cost or settings.password_hash_memory_cost,
            parallelism=parallelism or settings.password_hash_parallelism,
        )
        self._dummy_hash: str | None = None

    @property
    def dummy_hash(self) -> str:
        """Hash of a random secret, used to equalize timing for unknown users."""
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(secrets.token_urlsafe(32))
        return self._dummy_hash

    def hash(self, password: str) -> str:
        """Hash a password using Argon2id."""
        return self._hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Never raises for a mismatch or a malformed stored hash; both
        simply do not match.
        """
        try:
            return self._hasher.verify(hashed, password)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check whether a hash was produced with outdated parameters."""
        try:
            return self._hasher.check_needs_rehash(hashed)
        except InvalidHashError:
            return True

    async def hash_async(self, password: str) -> str:
        """Hash a password in a worker thread."""
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        """Verify a password in a worker thread."""
        return await asyncio.to_thread(self.verify, password, hashed)


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Get the process-wide hasher built from settings."""
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher
