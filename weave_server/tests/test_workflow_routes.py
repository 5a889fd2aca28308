"""Tests for the workflow document API."""

import pytest
from fastapi.testclient import TestClient

from weave_server import workflow_db
from weave_server.app import app

ALICE = {"X-Owner-Id": "alice"}
BOB = {"X-Owner-Id": "bob"}

NODES = [
    {"id": "t", "type": "text", "position": {"x": 0, "y": 0}, "data": {"label": "Text Input", "content": "hello"}},
    {"id": "g", "type": "llm", "position": {"x": 300, "y": 0}, "data": {"label": "LLM", "model": "gpt-4o"}},
]
EDGES = [{"id": "e1", "source": "t", "target": "g", "sourceHandle": None, "targetHandle": "prompt"}]


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(workflow_db, "WORKFLOW_DB_PATH", tmp_path / "test.db")
    with TestClient(app) as test_client:
        yield test_client


def create(client: TestClient, headers=ALICE, **body) -> dict:
    response = client.post("/api/workflows", json=body, headers=headers)
    assert response.status_code == 200
    return response.json()


class TestIdentity:
    """Test that identity is required."""

    def test_missing_identity_is_unauthorized(self, client):
        response = client.get("/api/workflows")
        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    def test_blank_identity_is_unauthorized(self, client):
        assert client.post("/api/workflows", json={}, headers={"X-Owner-Id": " "}).status_code == 401


class TestWorkflowCrud:
    """Test create, read, update and delete."""

    def test_create_defaults(self, client):
        workflow = create(client)
        assert workflow["name"] == "Untitled Workflow"
        assert workflow["nodes"] == []
        assert workflow["ownerId"] == "alice"
        assert workflow["createdAt"] == workflow["updatedAt"]

    def test_create_and_get(self, client):
        workflow = create(client, name="Flow", nodes=NODES, edges=EDGES)
        response = client.get(f"/api/workflows/{workflow['id']}", headers=ALICE)
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Flow"
        assert body["nodes"][1]["type"] == "llm"
        assert body["nodes"][1]["data"]["imageInputCount"] == 1
        assert body["edges"][0]["targetHandle"] == "prompt"

    def test_list_most_recent_first(self, client):
        first = create(client, name="first")
        second = create(client, name="second")
        client.put(f"/api/workflows/{first['id']}", json={"name": "first again"}, headers=ALICE)
        names = [w["name"] for w in client.get("/api/workflows", headers=ALICE).json()]
        assert names == ["first again", "second"]
        assert second["id"] != first["id"]

    def test_partial_update_keeps_other_fields(self, client):
        workflow = create(client, name="Flow", nodes=NODES, edges=EDGES)
        response = client.put(f"/api/workflows/{workflow['id']}", json={"name": "Renamed"}, headers=ALICE)
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Renamed"
        assert len(body["nodes"]) == 2
        assert len(body["edges"]) == 1

    def test_update_nodes(self, client):
        workflow = create(client, name="Flow", nodes=NODES, edges=EDGES)
        response = client.put(
            f"/api/workflows/{workflow['id']}",
            json={"nodes": NODES[:1], "edges": []},
            headers=ALICE,
        )
        body = response.json()
        assert [node["id"] for node in body["nodes"]] == ["t"]
        assert body["edges"] == []
        assert body["name"] == "Flow"

    def test_invalid_node_rejected(self, client):
        response = client.post(
            "/api/workflows",
            json={"nodes": [{"id": "x", "type": "video"}]},
            headers=ALICE,
        )
        assert response.status_code == 422

    def test_delete(self, client):
        workflow = create(client)
        assert client.delete(f"/api/workflows/{workflow['id']}", headers=ALICE).json() == {"deleted": workflow["id"]}
        assert client.get(f"/api/workflows/{workflow['id']}", headers=ALICE).status_code == 404
        assert client.delete(f"/api/workflows/{workflow['id']}", headers=ALICE).status_code == 404


class TestOwnerScoping:
    """Test that other owners' workflows look like missing ones."""

    def test_cross_owner_access_is_not_found(self, client):
        workflow = create(client, name="private")
        path = f"/api/workflows/{workflow['id']}"
        assert client.get(path, headers=BOB).status_code == 404
        assert client.put(path, json={"name": "stolen"}, headers=BOB).status_code == 404
        assert client.delete(path, headers=BOB).status_code == 404
        assert client.get(path, headers=ALICE).json()["name"] == "private"

    def test_list_is_per_owner(self, client):
        create(client, name="mine")
        create(client, headers=BOB, name="theirs")
        assert [w["name"] for w in client.get("/api/workflows", headers=ALICE).json()] == ["mine"]
        assert [w["name"] for w in client.get("/api/workflows", headers=BOB).json()] == ["theirs"]
