from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    project_name: str = Field(default="Sales Dashboard API")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development")

    database_url: str = Field(default="sqlite:///./vendas.db")
    api_prefix: str = Field(default="/api")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field(default="INFO")

    week_start: Literal["sunday", "monday"] = Field(default="sunday")
    seed_reference_data: bool = Field(default=True)
    demo_window_days: int = Field(default=30, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


settings = get_settings()
