"""Shared fixtures for n8n-deploy tests."""

from pathlib import Path

import httpx
import pytest

from n8n_deploy.config import Settings

BASE_URL = "https://n8n.test"
API_KEY = "test-api-key"


class FakeN8nServer:
    """Simulated n8n instance answering every request with one canned response."""

    def __init__(self, status_code: int = 200, json_body=None, text: str = "", error=None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code, text=self.text)


@pytest.fixture
def fake_server():
    """Factory for FakeN8nServer instances."""
    return FakeN8nServer


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        n8n_api_key=API_KEY,
        n8n_api_url=BASE_URL,
        n8n_workflow_base_dir=tmp_path,
        n8n_default_workflow="workflow.json",
    )


@pytest.fixture
def workflow_document() -> dict:
    return {
        "name": "Bug Investigation",
        "nodes": [
            {
                "name": "Webhook",
                "type": "n8n-nodes-base.webhook",
                "position": [250, 300],
                "parameters": {"path": "bug-report"},
            }
        ],
        "connections": {},
        "settings": {"executionOrder": "v1"},
    }
