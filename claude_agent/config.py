"""Settings via pydantic-settings with CLAUDE_AGENT_ env prefix.

Every field can be overridden from the environment (or a local .env file),
e.g. CLAUDE_AGENT_MODEL or CLAUDE_AGENT_KEY_FILE_PATH. The settings object
is frozen once built.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant."


def _default_key_file_path() -> Path:
    # Path.home() honours $HOME on POSIX
    return Path.home() / ".api" / "anthropic1"


class AgentConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CLAUDE_AGENT_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    # LLM
    model: str = "claude-3-5-sonnet-20240620"
    max_tokens: int = Field(4096, gt=0)
    temperature: float = Field(0.7, ge=0.0, le=1.0)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    # Direct API settings
    api_base_url: str = "https://api.anthropic.com"
    api_version: str = "2023-06-01"
    request_timeout: float = Field(60.0, gt=0)  # seconds, whole request
    key_file_path: Path = Field(default_factory=_default_key_file_path)

    log_level: str = "warning"
