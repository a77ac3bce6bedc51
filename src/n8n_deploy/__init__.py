"""n8n-deploy - manage n8n workflows from the command line."""

from n8n_deploy.client import WorkflowClient
from n8n_deploy.documents import load_document
from n8n_deploy.models.workflow import WorkflowDocument, WorkflowSummary

__version__ = "0.1.0"
__all__ = ["WorkflowClient", "WorkflowDocument", "WorkflowSummary", "load_document"]
