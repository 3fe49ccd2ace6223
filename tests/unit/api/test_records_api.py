"""
Tests for the /records router.

These tests demonstrate:
- Driving the Record Store through HTTP with FakeRedis underneath
- Store errors mapped to status codes (422 validation, 400 cast, 404 missing)
"""

from datetime import datetime
from uuid import uuid4

from fastapi.testclient import TestClient

from tasklist.api.deps import get_task_store
from tasklist.service.task_store import TaskStore


def create(client: TestClient, **fields) -> dict:
    response = client.post("/records", json=fields)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_returns_stored_document(records_client: TestClient):
    body = create(records_client, name="  Write tests  ")

    assert body["name"] == "Write tests"
    assert body["completed"] is False
    assert body["created_at"] == body["updated_at"]
    assert records_client.get(f"/records/{body['id']}").json() == body


def test_create_without_name_is_422_with_store_message(records_client: TestClient):
    response = records_client.post("/records", json={"completed": True})

    assert response.status_code == 422
    assert response.json()["detail"] == "Task name is required."


def test_create_with_long_name_is_422(records_client: TestClient):
    response = records_client.post("/records", json={"name": "a" * 201})

    assert response.status_code == 422
    assert response.json()["detail"] == "Task name cannot exceed 200 characters."


def test_list_filters_by_completion(records_client: TestClient):
    create(records_client, name="Done", completed=True)
    create(records_client, name="Todo")

    assert [t["name"] for t in records_client.get("/records").json()] == ["Done", "Todo"]
    assert [t["name"] for t in records_client.get("/records?completed=true").json()] == ["Done"]
    assert [t["name"] for t in records_client.get("/records?completed=false").json()] == ["Todo"]


def test_malformed_id_is_400(records_client: TestClient):
    response = records_client.get("/records/invalid-id")

    assert response.status_code == 400
    assert response.json()["detail"] == 'Cast to TaskId failed for value "invalid-id"'


def test_unknown_id_is_404(records_client: TestClient):
    assert records_client.get(f"/records/{uuid4()}").status_code == 404
    assert records_client.post(f"/records/{uuid4()}/toggle").status_code == 404


def test_patch_renames_and_keeps_created_at(records_client: TestClient):
    body = create(records_client, name="Original")

    response = records_client.patch(f"/records/{body['id']}", json={"name": " Renamed "})

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert response.json()["created_at"] == body["created_at"]


def test_patch_with_empty_name_leaves_record_unchanged(records_client: TestClient):
    body = create(records_client, name="Keep me")

    response = records_client.patch(f"/records/{body['id']}", json={"name": ""})

    assert response.status_code == 422
    assert records_client.get(f"/records/{body['id']}").json()["name"] == "Keep me"


def test_toggle_flips_completion(records_client: TestClient):
    body = create(records_client, name="Flip")

    toggled = records_client.post(f"/records/{body['id']}/toggle").json()

    assert toggled["completed"] is True
    assert datetime.fromisoformat(toggled["updated_at"]) > datetime.fromisoformat(body["updated_at"])


def test_delete_then_lookup_is_404(records_client: TestClient):
    body = create(records_client, name="Short lived")

    assert records_client.delete(f"/records/{body['id']}").status_code == 204
    assert records_client.get(f"/records/{body['id']}").status_code == 404
    assert records_client.delete(f"/records/{body['id']}").status_code == 404
    assert records_client.delete("/records/nope").status_code == 400


def test_task_deleted_before_save_is_404(app, fake_redis):
    """A task removed between lookup and save is reported missing, not recreated."""

    class DeletingStore(TaskStore):
        async def save(self, task):
            await self.delete_by_id(task.id)
            return await super().save(task)

    store = DeletingStore(fake_redis, prefix="test-task")
    app.dependency_overrides[get_task_store] = lambda: store
    client = TestClient(app)
    body = create(client, name="Racing")

    assert client.post(f"/records/{body['id']}/toggle").status_code == 404
    assert client.patch(f"/records/{body['id']}", json={"name": "Renamed"}).status_code == 404
    assert client.get("/records").json() == []
