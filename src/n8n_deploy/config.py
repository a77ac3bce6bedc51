"""Configuration management for n8n-deploy."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from n8n_deploy.exceptions import ConfigError

DEFAULT_API_URL = "https://n8n.blaze.money"
DEFAULT_WORKFLOW_PATH = "docs/agentic-workflows/n8n-workflows/bug-investigation-template.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    # n8n instance
    # Create a key at: <N8N_API_URL>/settings/api
    n8n_api_key: str = ""
    n8n_api_url: str = DEFAULT_API_URL

    # Workflow documents
    n8n_workflow_base_dir: Path = Field(default_factory=Path.cwd)  # Relative document paths resolve here
    n8n_default_workflow: str = DEFAULT_WORKFLOW_PATH

    # HTTP (None waits forever)
    n8n_timeout: Optional[float] = None

    # Logging
    n8n_log_level: str = "WARNING"

    @field_validator("n8n_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def api_key_hint(self) -> str:
        """Where an operator can create an API key."""
        return f"{self.n8n_api_url}/settings/api"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def require_api_key(settings: Settings) -> str:
    """Return the configured API key.

    Raises:
        ConfigError: If N8N_API_KEY is not set
    """
    if not settings.n8n_api_key:
        raise ConfigError("N8N_API_KEY environment variable is required")
    return settings.n8n_api_key
