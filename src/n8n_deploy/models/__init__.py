"""Models package."""

from n8n_deploy.models.workflow import WorkflowDocument, WorkflowSummary

__all__ = ["WorkflowDocument", "WorkflowSummary"]
