"""
Runtime configuration, read from environment variables prefixed with
AUTOMATIONS_ (for example AUTOMATIONS_DATABASE_URL) or a local .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AUTOMATIONS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = Field("sqlite:///automations.db", description="SQLAlchemy database URL")
    openai_model: str = Field("gpt-4o-mini", description="Chat model used to draft definitions")
    log_level: Literal["debug", "info", "warning", "error"] = "info"
    log_format: Literal["console", "json"] = "console"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
