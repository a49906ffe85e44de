"""Tests for per-user session history."""

from httpx import AsyncClient


class TestMathModeHistory:
    async def test_derived_fields(self, client: AsyncClient, create_user):
        await create_user("h1", username="historian")
        await client.post(
            "/api/mathmode/session",
            json={
                "userId": "h1",
                "operator": "-",
                "totalQuestions": 10,
                "correctAnswers": 8,
                "incorrectAnswers": 2,
                "digits1": 2,
                "digits2": 3,
            },
        )

        data = (await client.get("/api/mathmode/user-sessions", params={"username": "HISTORIAN"})).json()
        assert data["operator"] == "all"
        [row] = data["sessions"]
        assert row["accuracy_percentage"] == 80.0
        assert row["difficulty"] == 2.5
        assert row["operator"] == "-"

    async def test_operator_filter(self, client: AsyncClient, create_user):
        await create_user("h1", username="historian")
        for op in ("+", "×"):
            await client.post(
                "/api/mathmode/session",
                json={"userId": "h1", "operator": op, "totalQuestions": 5, "correctAnswers": 5},
            )
        data = (await client.get("/api/mathmode/user-sessions", params={"username": "historian", "operator": "×"})).json()
        assert [row["operator"] for row in data["sessions"]] == ["×"]

    async def test_username_required(self, client: AsyncClient):
        response = await client.get("/api/mathmode/user-sessions")
        assert response.status_code == 400
        assert response.json() == {"error": "Username is required"}


class TestSnakeHistory:
    async def test_newest_first(self, client: AsyncClient, create_user):
        await create_user("h2", username="serpent")
        for score in (1, 2, 3):
            await client.post("/api/snake/session", json={"userId": "h2", "score": score})

        sessions = (await client.get("/api/snake/user-sessions", params={"username": "serpent"})).json()["sessions"]
        assert [s["score"] for s in sessions] == [3, 2, 1]

    async def test_unknown_username_is_empty(self, client: AsyncClient):
        response = await client.get("/api/snake/user-sessions", params={"username": "nobody"})
        assert response.status_code == 200
        assert response.json()["sessions"] == []


class TestTypeMasterHistory:
    async def test_mastery_per_row_and_custom_filter(self, client: AsyncClient, create_user):
        await create_user("h3", username="keys")
        await client.post(
            "/api/typemaster/session",
            json={"userId": "h3", "lessonId": "home-row", "wpm": 50, "accuracy": 95},
        )
        await client.post(
            "/api/typemaster/session",
            json={"userId": "h3", "lessonId": "custom-birds", "wpm": 41, "accuracy": 88.5,
                  "customListName": "Birds"},
        )

        data = (await client.get("/api/typemaster/user-sessions", params={"username": "keys"})).json()
        assert data["lesson"] == "all"
        assert [row["mastery_score"] for row in data["sessions"]] == [36.3, 47.5]

        custom = (await client.get("/api/typemaster/user-sessions", params={"username": "keys", "lesson": "custom"})).json()
        [row] = custom["sessions"]
        assert row["custom_list_name"] == "Birds"
        assert row["lesson_id"] == "custom-birds"
