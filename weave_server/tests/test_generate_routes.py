"""Tests for the generation endpoint with a stubbed orchestrator."""

import pytest
from fastapi.testclient import TestClient

from weave.models.generation import GenerationRequest, GenerationResult, Intent
from weave.providers.base import MissingCredentialError
from weave_server.app import app
from weave_server.generate_routes import get_orchestrator

HEADERS = {"X-Owner-Id": "alice"}


class StubOrchestrator:
    """Returns a fixed result (or raises) and records requests."""

    def __init__(self, result: GenerationResult | Exception) -> None:
        self.result = result
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def make_client():
    def factory(result):
        orchestrator = StubOrchestrator(result)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return TestClient(app), orchestrator

    yield factory
    app.dependency_overrides.clear()


class TestValidation:
    """Test request validation."""

    def test_missing_fields(self, make_client):
        client, orchestrator = make_client(GenerationResult(success=True, content="x"))
        response = client.post("/api/generate", json={"model": "", "userPrompt": ""}, headers=HEADERS)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["errors"] == ["Model is required", "User prompt is required"]
        assert body["error"] == "Model is required, User prompt is required"
        assert orchestrator.requests == []

    def test_absent_fields(self, make_client):
        client, orchestrator = make_client(GenerationResult(success=True, content="x"))
        response = client.post("/api/generate", json={}, headers=HEADERS)
        assert response.status_code == 400
        assert "User prompt is required" in response.json()["errors"]

    def test_wrong_types(self, make_client):
        client, orchestrator = make_client(GenerationResult(success=True, content="x"))
        response = client.post(
            "/api/generate",
            json={"model": "gpt-4o", "userPrompt": "hi", "images": "not-a-list"},
            headers=HEADERS,
        )
        assert response.status_code == 400
        assert orchestrator.requests == []

    def test_non_json_body(self, make_client):
        client, _ = make_client(GenerationResult(success=True, content="x"))
        response = client.post("/api/generate", content=b"not json", headers=HEADERS)
        assert response.status_code == 400

    def test_identity_required(self, make_client):
        client, orchestrator = make_client(GenerationResult(success=True, content="x"))
        response = client.post("/api/generate", json={"model": "gpt-4o", "userPrompt": "hi"})
        assert response.status_code == 401
        assert orchestrator.requests == []


class TestGenerate:
    """Test the outcome mapping."""

    def test_success(self, make_client):
        client, orchestrator = make_client(
            GenerationResult(success=True, content="Hello", intent=Intent.text_only)
        )
        response = client.post(
            "/api/generate",
            json={"model": "gpt-4o", "systemPrompt": "Be brief.", "userPrompt": "hi", "images": ["data:image/png;base64,AAAA"]},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "content": "Hello",
            "image": None,
            "error": None,
            "intent": "text_only",
        }
        request = orchestrator.requests[0]
        assert request.system_prompt == "Be brief."
        assert request.images == ["data:image/png;base64,AAAA"]

    def test_failed_result_is_500(self, make_client):
        client, _ = make_client(GenerationResult(success=False, error="Image generation failed."))
        response = client.post("/api/generate", json={"model": "gpt-4o", "userPrompt": "draw"}, headers=HEADERS)
        assert response.status_code == 500
        assert response.json()["error"] == "Image generation failed."

    def test_missing_credential_is_500(self, make_client):
        client, _ = make_client(MissingCredentialError("OPENAI_API_KEY is not configured."))
        response = client.post("/api/generate", json={"model": "gpt-4o", "userPrompt": "hi"}, headers=HEADERS)
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "OPENAI_API_KEY is not configured."}

    def test_unexpected_error_is_500(self, make_client):
        client, _ = make_client(RuntimeError("kaboom"))
        response = client.post("/api/generate", json={"model": "gpt-4o", "userPrompt": "hi"}, headers=HEADERS)
        assert response.status_code == 500
        assert response.json()["error"] == "kaboom"
