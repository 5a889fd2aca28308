"""HTTP client for the nodeweave server.

Serves as the document backend for ``AutoSaver``, the generation callable
for ``NodeRunner`` and the upload function for ``attach_image``::

    client = WeaveClient("http://localhost:8000", owner_id="me")
    runner = NodeRunner(store, client.generate)
    saver = AutoSaver(store, client)
"""

from __future__ import annotations

import httpx

from weave.models.generation import GenerationRequest, GenerationResult
from weave.models.workflow import Workflow, WorkflowCreate, WorkflowUpdate


class WeaveClientError(Exception):
    """Exception raised when a request to the server fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WeaveClient:
    """Async client for workflows, generation and uploads."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        owner_id: str | None = None,
        timeout: float = 180.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the nodeweave server
            owner_id: Identity sent as X-Owner-Id on every request
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.owner_id = owner_id
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if self.owner_id:
            return {"X-Owner-Id": self.owner_id}
        return {}

    async def _request(self, method: str, path: str, json: dict | None = None) -> httpx.Response:
        url = f"{self.base_url}/api{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                return await client.request(method, url, json=json, headers=self._headers())
        except httpx.RequestError as e:
            raise WeaveClientError(f"Failed to connect to server at {self.base_url}: {e}") from e

    @staticmethod
    def _check(response: httpx.Response, not_found: str = "Not found") -> None:
        if response.status_code == 404:
            raise WeaveClientError(not_found, status_code=404)
        if response.status_code == 401:
            raise WeaveClientError("Unauthorized", status_code=401)
        if response.is_error:
            raise WeaveClientError(
                f"Server returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

    # --- Generation ---

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run a generation request.

        Failures reported by the server (validation, provider errors) come
        back as an unsuccessful result rather than an exception.
        """
        response = await self._request(
            "POST", "/generate", json=request.model_dump(mode="json", by_alias=True, exclude_none=True)
        )
        if response.status_code in (400, 500):
            try:
                body = response.json()
            except ValueError:
                body = None  # e.g. a plain text "Internal Server Error"
            if isinstance(body, dict) and body.get("success") is False:
                return GenerationResult(success=False, error=body.get("error") or "An error occurred")
        self._check(response)
        return GenerationResult.model_validate(response.json())

    # --- Workflows ---

    async def list_workflows(self) -> list[Workflow]:
        response = await self._request("GET", "/workflows")
        self._check(response)
        return [Workflow.model_validate(item) for item in response.json()]

    async def get_workflow(self, workflow_id: str) -> Workflow:
        response = await self._request("GET", f"/workflows/{workflow_id}")
        self._check(response, not_found=f"Workflow not found: {workflow_id}")
        return Workflow.model_validate(response.json())

    async def create_workflow(self, workflow: WorkflowCreate | None = None) -> Workflow:
        workflow = workflow or WorkflowCreate()
        response = await self._request("POST", "/workflows", json=workflow.model_dump(mode="json", by_alias=True))
        self._check(response)
        return Workflow.model_validate(response.json())

    async def update_workflow(self, workflow_id: str, update: WorkflowUpdate) -> Workflow:
        response = await self._request(
            "PUT",
            f"/workflows/{workflow_id}",
            json=update.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        self._check(response, not_found=f"Workflow not found: {workflow_id}")
        return Workflow.model_validate(response.json())

    async def delete_workflow(self, workflow_id: str) -> None:
        response = await self._request("DELETE", f"/workflows/{workflow_id}")
        self._check(response, not_found=f"Workflow not found: {workflow_id}")

    # --- Uploads ---

    async def upload_image(self, data_url: str) -> str:
        """Upload an inline image and return its durable URL."""
        response = await self._request("POST", "/uploads", json={"image": data_url})
        self._check(response)
        return response.json()["url"]
