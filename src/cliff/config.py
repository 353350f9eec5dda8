"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `CLIFF_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_shell() -> str:
    return os.environ.get("SHELL") or "/bin/sh"


class Settings(BaseSettings):
    """CLIFF settings.

    All fields are environment-configurable. Prefix is `CLIFF_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIFF_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="WARNING")

    # LLM
    openai_api_key: str | None = Field(default=None)
    openai_base_url: str | None = Field(default=None)
    openai_model: str = Field(default="gpt-4o-mini")
    openai_timeout_s: float = Field(default=120.0)
    planner_temperature: float = Field(default=0.0, ge=0.0, le=2.0)

    # Search
    search_provider: Literal["duckduckgo", "tavily"] = Field(default="duckduckgo")
    search_max_results: int = Field(default=8, ge=1, le=50)

    tavily_api_key: str | None = Field(default=None)
    tavily_api_base_url: str = Field(default="https://api.tavily.com")
    tavily_search_depth: Literal["basic", "advanced"] = Field(default="basic")
    tavily_timeout_s: float = Field(default=30.0, ge=1.0, le=300.0)
    tavily_max_retries: int = Field(default=3, ge=0, le=10)
    tavily_retry_backoff_s: float = Field(default=0.75, ge=0.0, le=30.0)
    tavily_retry_max_backoff_s: float = Field(default=8.0, ge=0.0, le=120.0)

    # Networking
    http_timeout_s: float = Field(default=30.0)
    http_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
    )
    max_page_chars: int = Field(default=25_000, ge=1000, le=500_000)

    # Local machine
    shell: str = Field(default_factory=_default_shell)

    def masked(self) -> dict[str, object]:
        """Settings as a plain dict with secrets replaced by a marker."""

        data = self.model_dump()
        for key in ("openai_api_key", "tavily_api_key"):
            data[key] = "Set" if data.get(key) else "Not Set"
        return data


def resolve_env_file() -> Path | None:
    """Return the `.env` file that :func:`load_settings` would read, if any."""

    env_file_override = os.getenv("CLIFF_ENV_FILE")
    if env_file_override:
        return Path(env_file_override)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return default_env

    return None


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_path = resolve_env_file()
    if env_path is not None:
        return Settings(_env_file=env_path)
    return Settings()
