"""Configuration package for addon sync."""

from .settings import (
    StremioSettings,
    AddonFileSettings,
    WebSettings,
    LoggingSettings,
    AppSettings,
    get_settings,
    reset_settings
)

__all__ = [
    "StremioSettings",
    "AddonFileSettings",
    "WebSettings",
    "LoggingSettings",
    "AppSettings",
    "get_settings",
    "reset_settings"
]
