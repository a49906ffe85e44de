"""Tests for get-or-create, profile reads and profile edits."""

from httpx import AsyncClient

import gamehub.users.service as service


class TestGetOrCreate:
    async def test_creates_user_with_email_local_part(self, client: AsyncClient):
        response = await client.post("/api/user", json={"userId": "did:privy:abc", "email": "snowfro@example.com"})
        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["id"] == "did:privy:abc"
        assert profile["username"] == "snowfro"
        assert profile["total_games_played"] == 0
        assert profile["total_score"] == 0

    async def test_second_call_returns_existing(self, client: AsyncClient):
        first = await client.post("/api/user", json={"userId": "u-1", "email": "first@example.com"})
        second = await client.post("/api/user", json={"userId": "u-1", "email": "changed@example.com"})
        assert second.status_code == 200
        assert second.json()["profile"]["email"] == "first@example.com"
        assert second.json()["profile"]["created_at"] == first.json()["profile"]["created_at"]

        fetched = await client.get("/api/user", headers={"X-User-Id": "u-1"})
        assert fetched.json()["profile"]["created_at"] == first.json()["profile"]["created_at"]
        assert fetched.json()["profile"]["updated_at"].endswith("Z")

    async def test_invalid_local_part_leaves_username_empty(self, client: AsyncClient):
        response = await client.post("/api/user", json={"userId": "u-2", "email": "a.b@example.com"})
        assert response.json()["profile"]["username"] is None

    async def test_taken_local_part_leaves_username_empty(self, client: AsyncClient):
        await client.post("/api/user", json={"userId": "u-3", "email": "alex@one.com"})
        response = await client.post("/api/user", json={"userId": "u-4", "email": "ALEX@two.com"})
        assert response.json()["profile"]["username"] is None

    async def test_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/user", json={"userId": "u-5"})
        assert response.status_code == 400
        assert "error" in response.json()

    async def test_email_owned_by_other_account(self, client: AsyncClient):
        await client.post("/api/user", json={"userId": "u-6", "email": "shared@example.com"})
        response = await client.post("/api/user", json={"userId": "u-7", "email": "shared@example.com"})
        assert response.status_code == 409


class TestGetProfile:
    async def test_requires_identity_header(self, client: AsyncClient):
        response = await client.get("/api/user")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    async def test_unknown_user(self, client: AsyncClient):
        response = await client.get("/api/user", headers={"X-User-Id": "ghost"})
        assert response.status_code == 404

    async def test_own_profile(self, client: AsyncClient, create_user):
        await create_user("u-10", username="tenth")
        response = await client.get("/api/user", headers={"X-User-Id": "u-10"})
        assert response.status_code == 200
        assert response.json()["profile"]["username"] == "tenth"


class TestUpdateProfile:
    async def test_update_username_and_avatar(self, client: AsyncClient, create_user):
        await create_user("u-20")
        response = await client.patch(
            "/api/user",
            json={"username": "New_Name", "avatar_url": "https://img.example/a.png"},
            headers={"X-User-Id": "u-20"},
        )
        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["username"] == "New_Name"
        assert profile["avatar_url"] == "https://img.example/a.png"

    async def test_update_wallet_only(self, client: AsyncClient, create_user):
        await create_user("u-21", username="walleter")
        response = await client.patch(
            "/api/user", json={"wallet_address": "0xabc"}, headers={"X-User-Id": "u-21"}
        )
        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["wallet_address"] == "0xabc"
        assert profile["username"] == "walleter"

    async def test_bad_username_format(self, client: AsyncClient, create_user):
        await create_user("u-22")
        response = await client.patch("/api/user", json={"username": "no"}, headers={"X-User-Id": "u-22"})
        assert response.status_code == 400
        assert "3-20 characters" in response.json()["error"]

    async def test_username_taken_by_other_user(self, client: AsyncClient, create_user):
        await create_user("u-23", username="Taken")
        await create_user("u-24", username="original")
        response = await client.patch("/api/user", json={"username": "taken"}, headers={"X-User-Id": "u-24"})
        assert response.status_code == 409

        profile = (await client.get("/api/user", headers={"X-User-Id": "u-24"})).json()["profile"]
        assert profile["username"] == "original"

    async def test_username_claimed_after_availability_check(self, client: AsyncClient, create_user, monkeypatch):
        await create_user("u-27", username="taken")
        await create_user("u-28", username="second")

        async def stale_check(*_args, **_kwargs) -> bool:
            return True

        monkeypatch.setattr(service, "is_username_available", stale_check)
        response = await client.patch("/api/user", json={"username": "TAKEN"}, headers={"X-User-Id": "u-28"})
        assert response.status_code == 409
        assert response.json() == {"error": "Username is already taken"}

        profile = (await client.get("/api/user", headers={"X-User-Id": "u-28"})).json()["profile"]
        assert profile["username"] == "second"

    async def test_resave_own_username_with_new_case(self, client: AsyncClient, create_user):
        await create_user("u-25", username="casey")
        response = await client.patch("/api/user", json={"username": "Casey"}, headers={"X-User-Id": "u-25"})
        assert response.status_code == 200
        assert response.json()["profile"]["username"] == "Casey"

    async def test_no_fields(self, client: AsyncClient, create_user):
        await create_user("u-26")
        response = await client.patch("/api/user", json={}, headers={"X-User-Id": "u-26"})
        assert response.status_code == 400
        assert response.json()["error"] == "No fields to update"

    async def test_unknown_user(self, client: AsyncClient):
        response = await client.patch("/api/user", json={"username": "ghosty"}, headers={"X-User-Id": "ghost"})
        assert response.status_code == 404

    async def test_requires_identity(self, client: AsyncClient):
        response = await client.patch("/api/user", json={"username": "anyone"})
        assert response.status_code == 401


class TestPublicProfiles:
    async def test_lookup_is_case_insensitive(self, client: AsyncClient, create_user):
        await create_user("u-30", username="SnowFro")
        response = await client.get("/api/users/snowfro")
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["username"] == "SnowFro"
        assert "email" not in user
        assert "id" not in user

    async def test_not_found(self, client: AsyncClient):
        response = await client.get("/api/users/nobody")
        assert response.status_code == 404

    async def test_directory_lists_named_users_only(self, client: AsyncClient, create_user):
        await create_user("u-31", username="zed")
        await create_user("u-32", username="amy")
        await create_user("u-33", email="x.y@example.com")  # no username
        response = await client.get("/api/users")
        assert response.status_code == 200
        names = [u["username"] for u in response.json()["users"]]
        assert names == ["amy", "zed"]
