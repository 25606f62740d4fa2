"""Application configuration settings."""

from typing import Optional, List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StremioSettings(BaseSettings):
    """Stremio API configuration."""

    api_base: str = Field(default="https://api.strem.io/api/")
    # None keeps aiohttp's default client timeout
    timeout_seconds: Optional[float] = Field(default=None)

    model_config = SettingsConfigDict(env_prefix="STREMIO_")


class AddonFileSettings(BaseSettings):
    """Uploaded addon file handling."""

    accepted_content_types: List[str] = Field(default_factory=lambda: ["application/json"])
    strict_collection: bool = Field(default=False)
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)

    model_config = SettingsConfigDict(env_prefix="ADDON_FILE_")


class WebSettings(BaseSettings):
    """Local web server configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080)
    session_cookie: str = Field(default="addon_sync_session")
    max_sessions: int = Field(default=1000)

    model_config = SettingsConfigDict(env_prefix="WEB_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    format: str = Field(default="console")
    file_path: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(env_prefix="LOG_")


class AppSettings(BaseSettings):
    """Main application settings."""

    name: str = Field(default="Stremio Addon Sync")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development")

    # Sub-settings
    stremio: StremioSettings = Field(default_factory=StremioSettings)
    addon_file: AddonFileSettings = Field(default_factory=AddonFileSettings)
    web: WebSettings = Field(default_factory=WebSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get application settings, loading them on first use."""
    global settings
    if settings is None:
        settings = AppSettings()
    return settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global settings
    settings = None
