"""Notification provider interfaces for the notification service.

Hey future me - this is the PORT (interface) for notification providers!
The NotificationService (application layer) talks to INotificationProvider only,
the SMTP implementation lives in infrastructure/notifications.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Types of notifications that can be sent."""

    SONG_CREATED = "song_created"


class NotificationPriority(str, Enum):
    """Priority levels for notifications."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


@dataclass
class Notification:
    """Notification data object for passing to providers.

    Keep it provider-agnostic. Each provider formats it for its channel
    (the email provider uses title as subject and message as HTML body).
    """

    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.NORMAL
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now(UTC)


@dataclass
class NotificationResult:
    """Result of sending a notification through one provider."""

    success: bool
    provider_name: str
    notification_type: NotificationType
    error: str | None = None
    external_id: str | None = None  # e.g. SMTP message id


class INotificationProvider(ABC):
    """Interface for notification providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this provider (e.g., 'email')."""
        pass

    @property
    @abstractmethod
    def supported_types(self) -> list[NotificationType]:
        """List of notification types this provider can handle.

        Return empty list to support ALL types.
        """
        pass

    @abstractmethod
    async def send(self, notification: Notification) -> NotificationResult:
        """Send a notification through this provider."""
        pass

    @abstractmethod
    async def is_configured(self) -> bool:
        """Check if this provider has all required settings."""
        pass

    def supports(self, notification_type: NotificationType) -> bool:
        """Check if this provider supports a notification type."""
        supported = self.supported_types
        return len(supported) == 0 or notification_type in supported


__all__ = [
    "NotificationType",
    "NotificationPriority",
    "Notification",
    "NotificationResult",
    "INotificationProvider",
]
