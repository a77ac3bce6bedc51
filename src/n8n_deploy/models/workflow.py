"""Data models for workflows exchanged with the n8n API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# The server owns the workflow schema (name, nodes, connections, settings...),
# so a document stays an untyped JSON object on this side.
WorkflowDocument = dict[str, Any]


@dataclass(frozen=True)
class WorkflowSummary:
    """The fields of a server-side workflow shown to the operator.

    Attributes:
        id: Server-assigned identifier, normalised to a string
        name: Workflow name
        active: Whether the workflow runs automatically
    """

    id: str
    name: str
    active: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkflowSummary:
        """Build a summary from an API record, ignoring unknown fields."""
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            active=bool(data.get("active", False)),
        )

    def url_for(self, base_url: str) -> str:
        """Editor URL of this workflow on the given instance."""
        return f"{base_url.rstrip('/')}/workflow/{self.id}"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "active": self.active}
