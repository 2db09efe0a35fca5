"""Process-wide configuration loaded from the environment (and ``.env``)."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODELS = [
    "gemini-2.5-flash-lite",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
]


class Settings(BaseSettings):
    """Runtime settings for the generation service.

    Values come from environment variables (case-insensitive, no prefix) and
    an optional ``.env`` file in the working directory.  ``GEMINI_MODELS`` and
    ``CORS_ALLOW_ORIGINS`` take JSON arrays.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    google_api_key: Optional[str] = Field(
        default=None,
        description="API key for the Gemini generateContent endpoint.",
    )
    gemini_models: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MODELS),
        min_length=1,
        description="Model identifiers tried in order until one succeeds.",
    )
    gemini_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        min_length=8,
    )
    safety_settings_enabled: bool = Field(
        default=False,
        description="Attach the fixed safetySettings block to every request.",
    )

    retry_attempts: int = Field(default=3, ge=1, le=10)
    retry_delay_seconds: float = Field(default=2.0, ge=0)
    request_timeout_seconds: float = Field(default=60.0, gt=0)

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    static_dir: Path = Path("public")

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
