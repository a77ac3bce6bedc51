"""Exceptions raised by n8n-deploy."""

from __future__ import annotations

import json
from pathlib import Path


class N8nDeployError(Exception):
    """Base error for everything the CLI reports to the operator."""

    def __init__(self, message: str = "n8n-deploy failed"):
        self.message = message
        super().__init__(self.message)


class ConfigError(N8nDeployError):
    """Raised when required configuration is missing."""


class UsageError(N8nDeployError):
    """Raised when a command is missing a required argument."""


class LoadError(N8nDeployError):
    """Raised when a workflow document cannot be read or parsed."""

    def __init__(self, path: str | Path, cause: Exception | str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not load workflow from {path}: {cause}")


class RemoteError(N8nDeployError):
    """Raised when the n8n API answers with a non-2xx status.

    Transport failures use ``status_code=None`` with the transport message
    as ``body``.
    """

    def __init__(self, status_code: int | None, body: str):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Request failed: {body}"
        else:
            message = f"HTTP error! status: {status_code}, message: {body}"
        super().__init__(message)

    @property
    def detail(self) -> str:
        """Server-supplied error message, or the raw body when it is not JSON."""
        try:
            payload = json.loads(self.body)
        except (TypeError, ValueError):
            return self.body
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            return payload["message"]
        return self.body
