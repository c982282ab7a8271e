"""Application settings sourced from environment variables."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Dict, List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from toolchat.orchestrator.errors import ConfigError

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_FORWARDED_ENV = ["METEOSTAT_RAPID_API_KEY"]


def _split_csv(value: str | None, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _positive_int(name: str, value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer (got {value!r})") from exc
    if parsed <= 0:
        raise ConfigError(f"{name} must be positive (got {parsed})")
    return parsed


class Settings(BaseModel):
    """Runtime configuration for the chat client."""

    anthropic_api_key: str = Field(description="Credential for the inference endpoint")
    model: str = Field(default=DEFAULT_MODEL)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    llm_provider: str = Field(default="anthropic")
    forwarded_env: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FORWARDED_ENV),
        description="Variables copied into every spawned tool server's environment",
    )
    log_level: str = Field(default="INFO")
    log_file: str = Field(
        default=os.path.join("logs", "toolchat.log"),
        description="Rotating log file path; empty disables file logging",
    )

    def server_env(self) -> Dict[str, str]:
        """Environment handed to each tool server process."""

        return {name: os.environ.get(name, "") for name in self.forwarded_env}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        ConfigError: if ANTHROPIC_API_KEY is missing or a numeric value is invalid
    """

    load_dotenv()

    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        raise ConfigError("ANTHROPIC_API_KEY is not set")

    return Settings(
        anthropic_api_key=api_key,
        model=os.getenv("TOOLCHAT_MODEL", DEFAULT_MODEL),
        max_tokens=_positive_int(
            "TOOLCHAT_MAX_TOKENS", os.getenv("TOOLCHAT_MAX_TOKENS"), DEFAULT_MAX_TOKENS
        ),
        llm_provider=os.getenv("TOOLCHAT_LLM_PROVIDER", "anthropic"),
        forwarded_env=_split_csv(os.getenv("TOOLCHAT_FORWARD_ENV"), DEFAULT_FORWARDED_ENV),
        log_level=os.getenv("TOOLCHAT_LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("TOOLCHAT_LOG_FILE", os.path.join("logs", "toolchat.log")),
    )
