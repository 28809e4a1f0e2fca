"""Integration tests for the users API, including owner-only creation."""

import asyncio
from unittest.mock import patch

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from toolhub.domain.services import UserService
from toolhub.infrastructure.auth import PasswordCheck, verify_password
from toolhub.infrastructure.persistence.models import UserModel

NEW_USER = {
    "firstName": "Mark",
    "lastName": "Manager",
    "email": "mark@example.com",
    "password": "Password123!",
    "role": "manager",
}


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_owner_can_create_user_with_role(self, client: AsyncClient, owner_headers):
        res = await client.post("/api/v1/users", json=NEW_USER, headers=owner_headers)

        assert res.status_code == 201
        data = res.json()
        assert data["message"] == "New User Created"
        assert data["user"]["role"] == "manager"
        assert data["user"]["email"] == "mark@example.com"

    @pytest.mark.asyncio
    async def test_role_defaults_to_viewer(self, client: AsyncClient, owner_headers):
        payload = {k: v for k, v in NEW_USER.items() if k != "role"}

        res = await client.post("/api/v1/users", json=payload, headers=owner_headers)

        assert res.status_code == 201
        assert res.json()["user"]["role"] == "viewer"

    @pytest.mark.asyncio
    async def test_viewer_is_denied(self, client: AsyncClient, viewer_headers):
        res = await client.post("/api/v1/users", json=NEW_USER, headers=viewer_headers)

        assert res.status_code == 403
        assert res.json() == {
            "success": False,
            "message": "Access denied, administrators only",
            "statusCode": 403,
        }

    @pytest.mark.asyncio
    async def test_unauthenticated_is_rejected(self, client: AsyncClient):
        res = await client.post("/api/v1/users", json=NEW_USER)

        assert res.status_code == 401
        assert res.json()["message"] == "Token not provided"

    @pytest.mark.asyncio
    async def test_deleted_principal_gets_not_found(
        self, client: AsyncClient, owner, owner_headers, db_session: AsyncSession
    ):
        await UserService(db_session).delete_user(owner.id)

        res = await client.post("/api/v1/users", json=NEW_USER, headers=owner_headers)

        assert res.status_code == 404
        assert res.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_principal_lookup_timeout(self, client: AsyncClient, app, owner_headers):
        async def slow_get_user(self, user_id):
            await asyncio.sleep(1)

        app.state.settings = app.state.settings.model_copy(
            update={"principal_lookup_timeout_seconds": 0.05}
        )
        with patch.object(UserService, "get_user", slow_get_user):
            res = await client.post("/api/v1/users", json=NEW_USER, headers=owner_headers)

        assert res.status_code == 503
        assert res.json()["message"] == "User lookup timed out"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client: AsyncClient, owner_headers):
        await client.post("/api/v1/users", json=NEW_USER, headers=owner_headers)

        res = await client.post("/api/v1/users", json=NEW_USER, headers=owner_headers)

        assert res.status_code == 409
        assert res.json() == {
            "success": False,
            "message": "There is already a registered user with that email",
            "error": "Email already registered",
            "statusCode": 409,
        }

    @pytest.mark.asyncio
    async def test_invalid_role(self, client: AsyncClient, owner_headers):
        res = await client.post(
            "/api/v1/users", json={**NEW_USER, "role": "emperor"}, headers=owner_headers
        )

        assert res.status_code == 400
        assert res.json()["message"] == "Validation error"


class TestReadUsers:
    @pytest.mark.asyncio
    async def test_list_users(self, client: AsyncClient, owner, viewer_headers):
        res = await client.get("/api/v1/users", headers=viewer_headers)

        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Get list all users"
        assert data["counter"] == 2
        assert {u["email"] for u in data["users"]} == {"owner@example.com", "viewer@example.com"}
        assert all("password" not in u for u in data["users"])

    @pytest.mark.asyncio
    async def test_get_user_by_id(self, client: AsyncClient, owner, viewer_headers):
        res = await client.get(f"/api/v1/users/{owner.id}", headers=viewer_headers)

        assert res.status_code == 200
        assert res.json()["message"] == "Get user by ID"
        assert res.json()["user"]["id"] == owner.id
        assert res.json()["user"]["role"] == "owner"

    @pytest.mark.asyncio
    async def test_get_unknown_user(self, client: AsyncClient, viewer_headers):
        res = await client.get("/api/v1/users/does-not-exist", headers=viewer_headers)

        assert res.status_code == 404
        assert res.json() == {
            "success": False,
            "message": "User not found",
            "error": "Unregistered user",
            "statusCode": 404,
        }


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_update_user_rehashes_password(
        self, client: AsyncClient, viewer, viewer_headers, db_session: AsyncSession
    ):
        old_hash = viewer.password

        res = await client.put(
            f"/api/v1/users/{viewer.id}",
            json={
                "firstName": "Vera",
                "lastName": "Viewer",
                "email": "vera@example.com",
                "password": "NewPassword456!",
            },
            headers=viewer_headers,
        )

        assert res.status_code == 200
        assert res.json()["message"] == "User Updated"
        assert res.json()["user"]["email"] == "vera@example.com"

        result = await db_session.execute(
            select(UserModel.password).where(UserModel.id == viewer.id)
        )
        new_hash = result.scalar_one()
        assert new_hash != old_hash
        assert verify_password(new_hash, "NewPassword456!") is PasswordCheck.MATCH

    @pytest.mark.asyncio
    async def test_update_to_taken_email(
        self, client: AsyncClient, owner, viewer, viewer_headers
    ):
        res = await client.put(
            f"/api/v1/users/{viewer.id}",
            json={
                "firstName": "Vera",
                "lastName": "Viewer",
                "email": owner.email,
                "password": "Password123!",
            },
            headers=viewer_headers,
        )

        assert res.status_code == 409
        assert res.json()["error"] == "Email already registered"

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, client: AsyncClient, viewer_headers):
        res = await client.put(
            "/api/v1/users/does-not-exist",
            json={
                "firstName": "Vera",
                "lastName": "Viewer",
                "email": "vera@example.com",
                "password": "Password123!",
            },
            headers=viewer_headers,
        )

        assert res.status_code == 404
        assert res.json()["message"] == "User not found"


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_delete_user(self, client: AsyncClient, owner, viewer_headers):
        res = await client.delete(f"/api/v1/users/{owner.id}", headers=viewer_headers)

        assert res.status_code == 200
        assert res.json() == {
            "success": True,
            "message": f"User with ID {owner.id} deleted with success",
            "statusCode": 200,
        }

        follow_up = await client.get(f"/api/v1/users/{owner.id}", headers=viewer_headers)
        assert follow_up.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_user(self, client: AsyncClient, viewer_headers):
        res = await client.delete("/api/v1/users/does-not-exist", headers=viewer_headers)

        assert res.status_code == 404
        assert res.json()["error"] == "Not Found"
