"""Configuration module for songcatalog."""

from .settings import (
    AuthSettings,
    DatabaseSettings,
    MailSettings,
    ObservabilityConfig,
    Settings,
    UserAccount,
    get_settings,
)

__all__ = [
    "AuthSettings",
    "DatabaseSettings",
    "MailSettings",
    "ObservabilityConfig",
    "Settings",
    "UserAccount",
    "get_settings",
]
