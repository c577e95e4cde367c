"""Task endpoint tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.db.models import Task


class TestCreate:
    @pytest.mark.asyncio
    async def test_defaults(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post("/tasks", json={"title": "  Write report  "}, headers=alice["headers"])
        assert response.status_code == 200
        task = response.json()
        assert task["title"] == "Write report"
        assert task["status"] == "pending"
        assert task["priority"] == "medium"
        assert task["category"] == "own"
        assert task["type"] == "work"
        assert task["important"] is False
        assert task["user_id"] == alice["user"]["id"]

    @pytest.mark.asyncio
    async def test_all_fields(self, client: AsyncClient, alice: dict) -> None:
        body = {
            "title": "Ship",
            "status": "working",
            "description": "release 1.0",
            "priority": "high",
            "due_date": "2026-03-01",
            "due_time": "14:30:00",
            "category": "team",
            "type": "learning",
            "project_id": 3,
            "important": True,
            "assigned_to": "carol",
        }
        task = (await client.post("/tasks", json=body, headers=alice["headers"])).json()
        for key, value in body.items():
            assert task[key] == value

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, "", "   "])
    async def test_title_required(self, client: AsyncClient, alice: dict, title: str | None) -> None:
        response = await client.post("/tasks", json={"title": title}, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["error"] == "Title is required"

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.post("/tasks", json={"title": "x"})
        assert response.status_code == 401


class TestList:
    @pytest.mark.asyncio
    async def test_only_own_tasks(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        await client.post("/tasks", json={"title": "alice task"}, headers=alice["headers"])
        await client.post("/tasks", json={"title": "bob task"}, headers=bob["headers"])
        tasks = (await client.get("/tasks", headers=alice["headers"])).json()
        assert [t["title"] for t in tasks] == ["alice task"]

    @pytest.mark.asyncio
    async def test_anonymous_sees_unowned_rows(
        self, client: AsyncClient, alice: dict, db_session: AsyncSession
    ) -> None:
        db_session.add(Task(title="shared", user_id=None))
        await db_session.commit()
        await client.post("/tasks", json={"title": "mine"}, headers=alice["headers"])

        tasks = (await client.get("/tasks")).json()
        assert [t["title"] for t in tasks] == ["shared"]

    @pytest.mark.asyncio
    async def test_filters(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        await client.post("/tasks", json={"title": "Alpha", "priority": "high", "important": True}, headers=h)
        await client.post("/tasks", json={"title": "Beta", "description": "has ALPHA inside"}, headers=h)
        await client.post("/tasks", json={"title": "Gamma", "status": "done", "type": "learning"}, headers=h)

        async def titles(**params: str) -> list[str]:
            response = await client.get("/tasks", params=params, headers=h)
            assert response.status_code == 200
            return [t["title"] for t in response.json()]

        assert await titles(priority="high") == ["Alpha"]
        assert await titles(status="done") == ["Gamma"]
        assert await titles(type="learning") == ["Gamma"]
        assert await titles(important="true") == ["Alpha"]
        assert await titles(important="0") == ["Beta", "Gamma"]
        assert await titles(important="maybe") == ["Alpha", "Beta", "Gamma"]
        assert await titles(q="alpha") == ["Alpha", "Beta"]

    @pytest.mark.asyncio
    async def test_sorting(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        for title in ("b", "c", "a"):
            await client.post("/tasks", json={"title": title}, headers=h)

        async def titles(**params: str) -> list[str]:
            return [t["title"] for t in (await client.get("/tasks", params=params, headers=h)).json()]

        assert await titles() == ["b", "c", "a"]
        assert await titles(sort="title") == ["a", "b", "c"]
        assert await titles(sort="title", order="desc") == ["c", "b", "a"]
        assert await titles(sort="password_hash; DROP TABLE tasks") == ["b", "c", "a"]


class TestUpdate:
    @pytest.mark.asyncio
    async def test_patch_only_sent_fields(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        task = (await client.post("/tasks", json={"title": "t", "priority": "low"}, headers=h)).json()
        response = await client.put(f"/tasks/{task['id']}", json={"status": "done"}, headers=h)
        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "done"
        assert updated["priority"] == "low"
        assert updated["title"] == "t"

    @pytest.mark.asyncio
    async def test_explicit_null_clears(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        task = (await client.post("/tasks", json={"title": "t", "description": "d"}, headers=h)).json()
        updated = (await client.put(f"/tasks/{task['id']}", json={"description": None}, headers=h)).json()
        assert updated["description"] is None

    @pytest.mark.asyncio
    async def test_empty_patch(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        task = (await client.post("/tasks", json={"title": "t"}, headers=h)).json()
        response = await client.put(f"/tasks/{task['id']}", json={}, headers=h)
        assert response.status_code == 400
        assert response.json()["error"] == "Nothing to update"

    @pytest.mark.asyncio
    async def test_other_users_task_is_not_found(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        task = (await client.post("/tasks", json={"title": "t"}, headers=alice["headers"])).json()
        response = await client.put(f"/tasks/{task['id']}", json={"status": "done"}, headers=bob["headers"])
        assert response.status_code == 404
        assert response.json()["error"] == "Task not found"


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, alice: dict) -> None:
        h = alice["headers"]
        task = (await client.post("/tasks", json={"title": "t"}, headers=h)).json()
        response = await client.delete(f"/tasks/{task['id']}", headers=h)
        assert response.json() == {"success": True}
        assert (await client.get("/tasks", headers=h)).json() == []

    @pytest.mark.asyncio
    async def test_delete_other_users_task(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        task = (await client.post("/tasks", json={"title": "t"}, headers=alice["headers"])).json()
        response = await client.delete(f"/tasks/{task['id']}", headers=bob["headers"])
        assert response.status_code == 404
        assert len((await client.get("/tasks", headers=alice["headers"])).json()) == 1


class TestBulk:
    @pytest.mark.asyncio
    async def test_mark_all_done_and_clear(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        for title in ("a", "b"):
            await client.post("/tasks", json={"title": title}, headers=alice["headers"])
        await client.post("/tasks", json={"title": "bob"}, headers=bob["headers"])

        response = await client.post("/tasks/mark-all-done", headers=alice["headers"])
        assert response.json() == {"success": True}
        statuses = {t["status"] for t in (await client.get("/tasks", headers=alice["headers"])).json()}
        assert statuses == {"done"}

        await client.post("/tasks/clear-completed", headers=alice["headers"])
        assert (await client.get("/tasks", headers=alice["headers"])).json() == []

        bob_tasks = (await client.get("/tasks", headers=bob["headers"])).json()
        assert [(t["title"], t["status"]) for t in bob_tasks] == [("bob", "pending")]
