"""Configuration management for shadowsheet using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SHADOWSHEET_",
        extra="ignore",
    )

    # Content
    content_dir: Path | None = Field(
        default=None,
        description="Directory holding path YAML files (defaults to the packaged data)",
    )

    # Choice validation defaults for new characters
    validate_on_path_change: bool = Field(
        default=True, description="Reconcile stored choices when a path slot is reassigned"
    )
    validate_on_ancestry_change: bool = Field(
        default=True, description="Reconcile stored choices when the ancestry is reassigned"
    )
    preserve_invalid_choices: bool = Field(
        default=False, description="Keep stale choices in place instead of reconciling them"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")

    @property
    def data_dir(self) -> Path:
        """Get the content data directory path."""
        return self.content_dir or PACKAGE_DATA_DIR

    @property
    def paths_dir(self) -> Path:
        """Get the path definitions directory."""
        return self.data_dir / "paths"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
