"""Configuration management for Prose Lens."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paragraphs whose only text is one of these are editor leftovers
    artifact_denylist: list[str] = Field(
        default_factory=lambda: ["Drag"],
        alias="PROSE_LENS_ARTIFACT_DENYLIST",
    )

    # Letter ranges added to ASCII in the classifier's character classes
    upper_letters: str = Field(
        default="À-ÚÉÈ",
        alias="PROSE_LENS_UPPER_LETTERS",
    )
    lower_letters: str = Field(
        default="à-ú",
        alias="PROSE_LENS_LOWER_LETTERS",
    )

    skip_empty_spans: bool = Field(
        default=False,
        alias="PROSE_LENS_SKIP_EMPTY_SPANS",
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
