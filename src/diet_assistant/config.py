"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    analysis_max_tokens: int = 2000
    update_max_tokens: int = 1500
    menu_max_tokens: int = 2000
    analysis_temperature: float = 0.1
    menu_temperature: float = 0.7
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def ai_enabled(self) -> bool:
        """Whether a model credential is configured."""
        return bool(self.openai_api_key and self.openai_api_key.strip())
