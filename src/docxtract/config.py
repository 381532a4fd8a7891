"""Configuration management for docxtract."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from docxtract.constants import DOCX_EXTENSION


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOCXTRACT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")

    # Extraction Configuration
    temp_root: Path | None = Field(default=None, description="Parent directory for extraction directories")
    keep_extracted: bool = Field(default=False, description="Keep the extraction directory after parsing")
    unzip_timeout_seconds: float | None = Field(
        default=None, gt=0, description="Deadline for the unzip command in seconds"
    )
    accepted_extensions: tuple[str, ...] = Field(
        default=(DOCX_EXTENSION,), description="File extensions accepted for extraction"
    )


def get_settings(**overrides: object) -> Settings:
    """Get application settings.

    Args:
        overrides: Field values that take precedence over environment and .env

    Returns:
        Settings instance
    """
    return Settings(**overrides)
