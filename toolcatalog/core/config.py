"""
Central configuration management for toolcatalog.

Loads settings from environment variables and provides typed access.
"""
import os
from pathlib import Path
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """LLM configuration for the language-understanding service.

    Any OpenAI-compatible chat-completions endpoint works; point
    LLM_BASE_URL at a local server (e.g. Ollama's /v1) to run without
    a hosted API.
    """
    base_url: str = Field(default="https://api.openai.com/v1", alias="LLM_BASE_URL")
    model: str = Field(default="gpt-4o-mini", alias="LLM_MODEL")
    temperature: float = Field(default=0.3, alias="LLM_TEMPERATURE")
    max_tokens: int = Field(default=500, alias="LLM_MAX_TOKENS")
    api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")


class SearchSettings(BaseSettings):
    """Natural-language search behaviour."""
    intent_timeout: float = Field(
        default=5.0,
        alias="INTENT_TIMEOUT_SECONDS",
        description="Seconds to wait for intent extraction before falling back"
    )
    use_llm_intent: bool = Field(
        default=True,
        alias="USE_LLM_INTENT",
        description="Set false to always use keyword splitting (offline mode)"
    )


class Settings(BaseSettings):
    """Main settings aggregator."""
    llm: LLMSettings = Field(default_factory=LLMSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)

    # Project root
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def _load_api_key_file():
    """Load API key from config/api-key file if it exists."""
    key_path = Path(__file__).parent.parent.parent / "config" / "api-key"
    if key_path.exists() and not os.environ.get("OPENAI_API_KEY"):
        key = key_path.read_text(encoding="utf-8").strip()
        if key:
            os.environ["OPENAI_API_KEY"] = key


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    _load_api_key_file()
    return Settings()


# Convenience function
def load_dotenv_if_exists():
    """Load .env file if it exists, then load config/api-key."""
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    _load_api_key_file()
