"""Configuration settings for incremental_cache.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from incremental_cache.types import FileServerConfig


def _default_output_dir() -> Path:
    """Return the default output directory."""
    return Path.home() / ".local" / "share" / "incremental-cache"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the INCR_CACHE_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="INCR_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    output_dir: Path = Field(
        default_factory=_default_output_dir,
        description="Output directory the incremental-cache root is created under",
    )

    # External tooling
    docker_command: str = Field(
        default="docker",
        min_length=1,
        description="Container CLI used for image import and manifest inspection",
    )

    # File server contract
    upload_url: str | None = Field(
        default=None,
        description="URL cache archives are uploaded to from inside the build",
    )
    access_token: str | None = Field(
        default=None,
        description="Access token attached to cache archive uploads",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    def file_server_config(self) -> FileServerConfig | None:
        """Build the file server upload contract from settings.

        Returns:
            FileServerConfig if both upload URL and access token are set,
            otherwise None (uploads disabled).
        """
        if not self.upload_url or not self.access_token:
            return None
        from incremental_cache.cache.dirs import CACHE_ROOT_DIR, UPLOADS_DIR

        return FileServerConfig(
            upload_url=self.upload_url,
            access_token=self.access_token,
            files_dir=self.output_dir / CACHE_ROOT_DIR / UPLOADS_DIR,
        )


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2, exclude={"access_token"})


__all__ = ["Settings", "get_settings", "print_settings_json"]
