"""Configuration management for the Metafold client."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://api.metafold3d.com"


class Settings(BaseSettings):
    """Environment-driven configuration."""

    access_token: str | None = Field(default=None, alias="METAFOLD_ACCESS_TOKEN")
    project_id: str | None = Field(default=None, alias="METAFOLD_PROJECT_ID")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="METAFOLD_BASE_URL")
    request_timeout: float = Field(default=30.0, alias="METAFOLD_REQUEST_TIMEOUT")
    poll_interval_ms: int = Field(default=1000, ge=1, alias="METAFOLD_POLL_INTERVAL_MS")
    job_timeout_ms: int = Field(default=120_000, ge=1, alias="METAFOLD_JOB_TIMEOUT_MS")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    log_dir: Path | None = Field(default=None, alias="METAFOLD_LOG_DIR")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
