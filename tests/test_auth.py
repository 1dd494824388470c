"""Tests for registration, login, token rotation and profile endpoints"""

import pytest
from httpx import AsyncClient

from tests.helpers import TEST_PASSWORD


async def register(client, email="new.user@example.com", password="secret123"):
    return await client.post(
        "/auth/register",
        json={"name": "New User", "email": email, "password": password, "phone": "+919844444444"},
    )


@pytest.mark.asyncio
async def test_register_signs_user_in(client: AsyncClient):
    response = await register(client, email="New.User@Example.com")

    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["user"]["email"] == "new.user@example.com"

    profile = await client.get("/auth/profile", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert profile.status_code == 200
    assert profile.json()["name"] == "New User"


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_user):
    response = await register(client, email=test_user.email)

    assert response.status_code == 409
    assert response.json()["code"] == "email_already_registered"


@pytest.mark.asyncio
async def test_register_validates_payload(client: AsyncClient):
    response = await register(client, password="123")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login(client: AsyncClient, test_user):
    response = await client.post("/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD})

    assert response.status_code == 200
    assert response.json()["expires_in"] == 3600

    response = await client.post("/auth/login", json={"email": test_user.email, "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid email or password", "code": "invalid_credentials"}


@pytest.mark.asyncio
async def test_refresh_rotates_token(client: AsyncClient, test_user):
    login = await client.post("/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD})
    old_refresh = login.json()["refresh_token"]

    response = await client.post("/auth/refresh", json={"refresh_token": old_refresh})
    assert response.status_code == 200
    new_refresh = response.json()["refresh_token"]
    assert new_refresh != old_refresh

    # Only the latest refresh token is accepted
    response = await client.post("/auth/refresh", json={"refresh_token": old_refresh})
    assert response.status_code == 401

    response = await client.post("/auth/refresh", json={"refresh_token": "not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid refresh token"


@pytest.mark.asyncio
async def test_access_token_is_not_a_refresh_token(client: AsyncClient, test_user):
    login = await client.post("/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD})

    response = await client.post("/auth/refresh", json={"refresh_token": login.json()["access_token"]})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_protected_endpoints_require_token(client: AsyncClient):
    assert (await client.get("/orders")).status_code == 401
    assert (await client.get("/cart", headers={"Authorization": "Bearer garbage"})).status_code == 401


@pytest.mark.asyncio
async def test_update_profile(authenticated_client: AsyncClient):
    response = await authenticated_client.put("/auth/profile", json={"name": "Renamed User"})

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed User"
    assert response.json()["phone"] == "+919800000000"


@pytest.mark.asyncio
async def test_change_password(authenticated_client: AsyncClient, test_user):
    response = await authenticated_client.put(
        "/auth/change-password",
        json={"current_password": "not-my-password", "new_password": "brandnew123"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Current password is incorrect"

    response = await authenticated_client.put(
        "/auth/change-password",
        json={"current_password": TEST_PASSWORD, "new_password": "brandnew123"},
    )
    assert response.status_code == 200

    login = await authenticated_client.post("/auth/login", json={"email": test_user.email, "password": "brandnew123"})
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_deactivated_account_is_locked_out(authenticated_client: AsyncClient, test_user):
    response = await authenticated_client.delete("/auth/account")
    assert response.status_code == 200

    assert (await authenticated_client.get("/auth/profile")).status_code == 401

    login = await authenticated_client.post("/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD})
    assert login.status_code == 401
    assert login.json()["detail"] == "User account is disabled"
