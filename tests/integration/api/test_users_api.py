"""Integration tests for the user management endpoints."""

import pytest

USERS_URL = "/api/v1/users"


class TestProfile:
    @pytest.mark.asyncio
    async def test_profile(self, client, regular_user, user_headers):
        response = await client.get(f"{USERS_URL}/profile", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == regular_user.id
        assert body["email"] == regular_user.email
        assert "passwordHash" not in body

    @pytest.mark.asyncio
    async def test_profile_requires_token(self, client):
        response = await client.get(f"{USERS_URL}/profile")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"]["message"] == "Invalid or missing token"

    @pytest.mark.asyncio
    async def test_profile_rejects_malformed_header(self, client):
        response = await client.get(
            f"{USERS_URL}/profile", headers={"Authorization": "Token abc"}
        )

        assert response.status_code == 401


class TestListUsers:
    @pytest.mark.asyncio
    async def test_admin_lists_users(self, client, admin_headers, regular_user):
        response = await client.get(USERS_URL, headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["meta"] == {"page": 1, "limit": 10, "total": 2, "totalPages": 1}
        assert {u["email"] for u in body["data"]} == {"admin@example.com", regular_user.email}

    @pytest.mark.asyncio
    async def test_pagination(self, client, admin_headers, make_user):
        for _ in range(4):
            await make_user()

        response = await client.get(USERS_URL, headers=admin_headers, params={"page": 2, "limit": 2})

        body = response.json()
        assert len(body["data"]) == 2
        assert body["meta"]["total"] == 5
        assert body["meta"]["totalPages"] == 3

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, client, admin_headers):
        response = await client.get(USERS_URL, headers=admin_headers, params={"limit": 1000})

        assert response.json()["meta"]["limit"] == 100

    @pytest.mark.asyncio
    async def test_invalid_page(self, client, admin_headers):
        response = await client.get(USERS_URL, headers=admin_headers, params={"page": 0})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_regular_user_forbidden(self, client, user_headers):
        response = await client.get(USERS_URL, headers=user_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_requires_token(self, client):
        response = await client.get(USERS_URL)

        assert response.status_code == 401


class TestGetUser:
    @pytest.mark.asyncio
    async def test_admin_gets_any_user(self, client, admin_headers, regular_user):
        response = await client.get(f"{USERS_URL}/{regular_user.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["id"] == regular_user.id

    @pytest.mark.asyncio
    async def test_user_gets_self(self, client, regular_user, user_headers):
        response = await client.get(f"{USERS_URL}/{regular_user.id}", headers=user_headers)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_user_cannot_get_others(self, client, admin_user, user_headers):
        response = await client.get(f"{USERS_URL}/{admin_user.id}", headers=user_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_not_found(self, client, admin_headers):
        response = await client.get(f"{USERS_URL}/missing", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found"


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_user_updates_own_profile(self, client, regular_user, user_headers):
        response = await client.put(
            f"{USERS_URL}/{regular_user.id}",
            headers=user_headers,
            json={"fullName": "Nombre Nuevo", "phone": "3115556677"},
        )

        assert response.status_code == 200
        assert response.json()["fullName"] == "Nombre Nuevo"
        assert response.json()["phone"] == "3115556677"

    @pytest.mark.asyncio
    async def test_user_cannot_change_own_role(self, client, regular_user, user_headers):
        response = await client.put(
            f"{USERS_URL}/{regular_user.id}", headers=user_headers, json={"role": "ADMIN"}
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_user_cannot_update_others(self, client, admin_user, user_headers):
        response = await client.put(
            f"{USERS_URL}/{admin_user.id}", headers=user_headers, json={"fullName": "X"}
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_promotes_user(self, client, admin_headers, regular_user, user_headers):
        response = await client.put(
            f"{USERS_URL}/{regular_user.id}", headers=admin_headers, json={"role": "ADMIN"}
        )

        assert response.status_code == 200
        assert response.json()["role"] == "ADMIN"

        listing = await client.get(USERS_URL, headers=user_headers)
        assert listing.status_code == 200

    @pytest.mark.asyncio
    async def test_password_change_allows_login(self, client, regular_user, user_headers):
        response = await client.put(
            f"{USERS_URL}/{regular_user.id}",
            headers=user_headers,
            json={"password": "BrandNew123"},
        )
        assert response.status_code == 200

        login = await client.post(
            "/api/v1/auth/login",
            json={"email": regular_user.email, "password": "BrandNew123"},
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_weak_password_rejected(self, client, regular_user, user_headers):
        response = await client.put(
            f"{USERS_URL}/{regular_user.id}", headers=user_headers, json={"password": "weak"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_email_conflict(self, client, admin_user, regular_user, user_headers):
        response = await client.put(
            f"{USERS_URL}/{regular_user.id}",
            headers=user_headers,
            json={"email": admin_user.email},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_not_found(self, client, admin_headers):
        response = await client.put(
            f"{USERS_URL}/missing", headers=admin_headers, json={"fullName": "X"}
        )

        assert response.status_code == 404


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_admin_deactivates_user(self, client, admin_headers, regular_user, user_headers):
        response = await client.delete(f"{USERS_URL}/{regular_user.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"]

        # Record is kept but the user is locked out
        fetched = await client.get(f"{USERS_URL}/{regular_user.id}", headers=admin_headers)
        assert fetched.json()["isActive"] is False

        profile = await client.get(f"{USERS_URL}/profile", headers=user_headers)
        assert profile.status_code == 401

        login = await client.post(
            "/api/v1/auth/login",
            json={"email": regular_user.email, "password": "Password123"},
        )
        assert login.status_code == 401

    @pytest.mark.asyncio
    async def test_regular_user_cannot_delete(self, client, admin_user, user_headers):
        response = await client.delete(f"{USERS_URL}/{admin_user.id}", headers=user_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_not_found(self, client, admin_headers):
        response = await client.delete(f"{USERS_URL}/missing", headers=admin_headers)

        assert response.status_code == 404
