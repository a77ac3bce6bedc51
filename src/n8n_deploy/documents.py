"""Loading workflow documents from disk."""

from __future__ import annotations

import json
from pathlib import Path

from n8n_deploy.exceptions import LoadError
from n8n_deploy.logging import get_logger
from n8n_deploy.models.workflow import WorkflowDocument

logger = get_logger("documents")


def resolve_path(path: str | Path, base_dir: str | Path) -> Path:
    """Resolve ``path`` against ``base_dir`` unless it is already absolute."""
    path = Path(path).expanduser()
    if not path.is_absolute():
        path = Path(base_dir) / path
    return path.resolve()


def load_document(path: str | Path, base_dir: str | Path | None = None) -> WorkflowDocument:
    """
    Read a workflow document from a JSON file.

    The document is not validated beyond being a JSON object; the server
    decides whether the workflow itself is acceptable.

    Args:
        path: File path, relative paths resolve against ``base_dir``
        base_dir: Base directory for relative paths (default: working directory)

    Returns:
        The parsed document

    Raises:
        LoadError: If the file is missing, unreadable, or not a JSON object
    """
    full_path = resolve_path(path, base_dir if base_dir is not None else Path.cwd())
    logger.debug(f"Loading workflow document from {full_path}")

    try:
        with open(full_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise LoadError(full_path, f"file not found ({e.strerror})") from e
    except OSError as e:
        raise LoadError(full_path, e.strerror or str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoadError(full_path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise LoadError(full_path, f"expected a JSON object, got {type(data).__name__}")

    return data
