"""n8n REST API client for workflow lifecycle operations.

Wraps the public ``/api/v1/workflows`` endpoints: create a workflow from a
document, list workflows, and activate or deactivate one. Each method makes
exactly one request and never retries.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from n8n_deploy.config import Settings, require_api_key
from n8n_deploy.exceptions import RemoteError, UsageError
from n8n_deploy.logging import get_logger, log_warning
from n8n_deploy.models.workflow import WorkflowDocument, WorkflowSummary

logger = get_logger("client")

API_KEY_HEADER = "X-N8N-API-KEY"
WORKFLOWS_PATH = "/api/v1/workflows"


class WorkflowClient:
    """Client for the workflow endpoints of one n8n instance.

    Example usage:
        client = WorkflowClient("https://n8n.example.com", api_key)

        summary = await client.deploy(load_document("workflow.json"))
        print(summary.id, summary.url_for(client.base_url))

        for workflow in await client.list_workflows():
            print(workflow.name, workflow.active)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Instance URL, e.g. ``https://n8n.blaze.money``
            api_key: Value for the ``X-N8N-API-KEY`` header
            timeout: Seconds to wait per request; None waits indefinitely
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> WorkflowClient:
        """Build a client from settings. Raises ConfigError without an API key."""
        return cls(
            base_url=settings.n8n_api_url,
            api_key=require_api_key(settings),
            timeout=settings.n8n_timeout,
            transport=transport,
        )

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers = {API_KEY_HEADER: self.api_key}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Send one authenticated request.

        Raises:
            RemoteError: On a non-2xx status or a transport failure
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(with_body=payload is not None),
                    json=payload,
                )
            except httpx.HTTPError as e:
                raise RemoteError(None, str(e) or type(e).__name__) from e

        logger.debug(f"{method} {url} -> {response.status_code}")

        if not response.is_success:
            raise RemoteError(response.status_code, response.text)

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(
                response.status_code, f"invalid JSON in response: {response.text}"
            ) from e

    async def deploy(self, document: WorkflowDocument) -> WorkflowSummary:
        """Create a new workflow from a document.

        Not idempotent: deploying the same document twice creates two workflows.

        Args:
            document: Workflow document, sent as-is

        Returns:
            Summary of the created workflow
        """
        response = await self._request("POST", WORKFLOWS_PATH, payload=document)
        data = self._json(response)
        if not isinstance(data, dict):
            raise RemoteError(response.status_code, f"unexpected response body: {response.text}")
        return WorkflowSummary.from_dict(data)

    async def list_workflows(self) -> list[WorkflowSummary]:
        """List the workflows on the instance.

        Returns:
            Summaries from the response's ``data`` field; empty when there are none
        """
        response = await self._request("GET", WORKFLOWS_PATH)
        body = self._json(response)

        records = body.get("data") if isinstance(body, dict) else None
        if records is None:
            return []
        if not isinstance(records, list):
            log_warning(
                logger,
                "list_workflows",
                "ignoring non-list 'data' field",
                {"type": type(records).__name__},
            )
            return []

        return [WorkflowSummary.from_dict(record) for record in records if isinstance(record, dict)]

    async def set_active_state(self, workflow_id: str, active: bool) -> bool:
        """Activate or deactivate a workflow.

        Args:
            workflow_id: Workflow identifier, must be non-empty
            active: True to activate, False to deactivate

        Returns:
            True once the server acknowledges the change

        Raises:
            UsageError: If workflow_id is empty (no request is sent)
            RemoteError: If the server rejects the change
        """
        workflow_id = str(workflow_id or "").strip()
        if not workflow_id:
            raise UsageError("Workflow ID is required")

        action = "activate" if active else "deactivate"
        await self._request("POST", f"{WORKFLOWS_PATH}/{quote(workflow_id, safe='')}/{action}")
        return True

    async def activate(self, workflow_id: str) -> bool:
        return await self.set_active_state(workflow_id, True)

    async def deactivate(self, workflow_id: str) -> bool:
        return await self.set_active_state(workflow_id, False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} base_url={self.base_url}>"
