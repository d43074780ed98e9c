"""Unit tests for password hashing utilities."""

import pytest

from incapacidades.infrastructure.auth import PasswordHasher, get_password_hasher


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


class TestHashPassword:
    def test_hash_is_argon2id(self, hasher):
        hashed = hasher.hash("SecurePass123")

        assert hashed.startswith("$argon2id$")
        assert "SecurePass123" not in hashed

    def test_hash_is_salted(self, hasher):
        assert hasher.hash("SecurePass123") != hasher.hash("SecurePass123")

    def test_default_hasher_is_shared(self):
        hasher = get_password_hasher()
        hashed = hasher.hash("Password123")

        assert get_password_hasher() is hasher
        assert hasher.verify("Password123", hashed) is True
        assert hasher.verify("Password124", hashed) is False


class TestVerifyPassword:
    def test_correct_password(self, hasher):
        hashed = hasher.hash("SecurePass123")
        assert hasher.verify("SecurePass123", hashed) is True

    def test_wrong_password(self, hasher):
        hashed = hasher.hash("SecurePass123")
        assert hasher.verify("securepass123", hashed) is False

    def test_malformed_hash_does_not_raise(self, hasher):
        assert hasher.verify("SecurePass123", "not-a-hash") is False

    def test_dummy_hash_never_matches(self, hasher):
        assert hasher.verify("", hasher.dummy_hash) is False
        assert hasher.verify("Password123", hasher.dummy_hash) is False

    @pytest.mark.asyncio
    async def test_async_variants(self, hasher):
        hashed = await hasher.hash_async("SecurePass123")

        assert await hasher.verify_async("SecurePass123", hashed) is True
        assert await hasher.verify_async("Wrong123", hashed) is False


class TestNeedsRehash:
    def test_current_parameters(self, hasher):
        assert hasher.needs_rehash(hasher.hash("SecurePass123")) is False

    def test_outdated_parameters(self, hasher):
        stronger = PasswordHasher(time_cost=2, memory_cost=2048, parallelism=1)
        assert stronger.needs_rehash(hasher.hash("SecurePass123")) is True

    def test_malformed_hash(self, hasher):
        assert hasher.needs_rehash("garbage") is True
