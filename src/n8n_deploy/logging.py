"""Logging configuration for n8n-deploy.

Operator-facing output goes through rich consoles in the CLI. This module
configures the diagnostic log stream underneath it: request/response traces
from the workflow client and failure records from the command boundary.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

# Root logger for the n8n_deploy package
logger = logging.getLogger("n8n_deploy")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Send package diagnostics to stderr at ``level`` (name or number)."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger.setLevel(level)
    logger.handlers.clear()

    # stdout stays reserved for command output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger, e.g. ``get_logger("client")`` -> ``n8n_deploy.client``."""
    return logging.getLogger(f"n8n_deploy.{name}")


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    return f"{message} ({', '.join(f'{k}={v}' for k, v in context.items())})"


def log_failure(
    logger: logging.Logger,
    operation: str,
    error: Exception,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """
    Record a failed command step.

    Args:
        logger: Logger instance to use
        operation: What was being attempted, e.g. "deploying workflow"
        error: The error that ended it
        context: Extra key/value pairs such as path or workflow id
        level: Logging level (default: ERROR)
    """
    message = f"{operation}: {type(error).__name__}: {error}"
    logger.log(level, _with_context(message, context))


def log_warning(
    logger: logging.Logger,
    operation: str,
    message: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Record a tolerated anomaly in a server response."""
    logger.warning(_with_context(f"{operation}: {message}", context))


# Quiet by default; the CLI reconfigures from settings or --verbose
setup_logging()
