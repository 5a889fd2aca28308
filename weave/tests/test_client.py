"""Tests for the WeaveClient SDK against a mocked server."""

import asyncio
import json

import httpx
import pytest

from weave.models.generation import GenerationRequest
from weave.models.workflow import WorkflowCreate, WorkflowUpdate
from weave.sdk.client import WeaveClient, WeaveClientError

WORKFLOW = {
    "id": "wf-1",
    "ownerId": "me",
    "name": "Flow",
    "nodes": [{"id": "t", "type": "text", "position": {"x": 0, "y": 0}, "data": {"label": "Text Input", "content": "hi"}}],
    "edges": [],
    "createdAt": "2024-01-01T00:00:00+00:00",
    "updatedAt": "2024-01-01T00:00:00+00:00",
}


def make_client(handler) -> WeaveClient:
    return WeaveClient("http://weave.test/", owner_id="me", transport=httpx.MockTransport(handler))


class TestWorkflows:
    """Test workflow CRUD calls."""

    def test_get_workflow_sends_identity(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["owner"] = request.headers.get("x-owner-id")
            return httpx.Response(200, json=WORKFLOW)

        workflow = asyncio.run(make_client(handler).get_workflow("wf-1"))
        assert seen == {"path": "/api/workflows/wf-1", "owner": "me"}
        assert workflow.owner_id == "me"
        assert workflow.nodes[0].data.content == "hi"

    def test_not_found(self):
        client = make_client(lambda request: httpx.Response(404, json={"detail": "Workflow not found"}))
        with pytest.raises(WeaveClientError) as exc_info:
            asyncio.run(client.get_workflow("nope"))
        assert exc_info.value.status_code == 404

    def test_unauthorized(self):
        client = make_client(lambda request: httpx.Response(401, json={"detail": "Unauthorized"}))
        with pytest.raises(WeaveClientError) as exc_info:
            asyncio.run(client.list_workflows())
        assert exc_info.value.status_code == 401

    def test_create_and_update_send_camel_case(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append((request.method, json.loads(request.content)))
            return httpx.Response(200, json=WORKFLOW)

        client = make_client(handler)
        asyncio.run(client.create_workflow(WorkflowCreate(name="Flow")))
        asyncio.run(client.update_workflow("wf-1", WorkflowUpdate(name="Renamed")))

        assert bodies[0] == ("POST", {"name": "Flow", "nodes": [], "edges": []})
        assert bodies[1] == ("PUT", {"name": "Renamed"})

    def test_list_and_delete(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "DELETE":
                return httpx.Response(200, json={"deleted": "wf-1"})
            return httpx.Response(200, json=[WORKFLOW])

        client = make_client(handler)
        assert [w.id for w in asyncio.run(client.list_workflows())] == ["wf-1"]
        asyncio.run(client.delete_workflow("wf-1"))

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused")

        with pytest.raises(WeaveClientError):
            asyncio.run(make_client(handler).list_workflows())


class TestGenerateAndUpload:
    """Test generation and upload calls."""

    def test_generate_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "content": "Hello", "intent": "text_only"})

        result = asyncio.run(make_client(handler).generate(GenerationRequest(model="gpt-4o", user_prompt="hi")))
        assert result.success
        assert result.content == "Hello"
        assert seen == {"model": "gpt-4o", "userPrompt": "hi"}

    def test_generate_failure_is_a_result(self):
        client = make_client(lambda request: httpx.Response(
            500, json={"success": False, "error": "Image generation failed."}
        ))
        result = asyncio.run(client.generate(GenerationRequest(model="gpt-4o", user_prompt="draw")))
        assert not result.success
        assert result.error == "Image generation failed."

    def test_upload_image(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"image": "data:image/png;base64,AAAA"}
            return httpx.Response(200, json={"success": True, "url": "http://weave.test/api/uploads/a.png"})

        url = asyncio.run(make_client(handler).upload_image("data:image/png;base64,AAAA"))
        assert url == "http://weave.test/api/uploads/a.png"

    def test_generate_plain_text_error_raises(self):
        client = make_client(lambda request: httpx.Response(500, text="Internal Server Error"))
        with pytest.raises(WeaveClientError) as exc_info:
            asyncio.run(client.generate(GenerationRequest(model="gpt-4o", user_prompt="hi")))
        assert exc_info.value.status_code == 500
