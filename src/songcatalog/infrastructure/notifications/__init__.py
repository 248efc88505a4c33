"""Notification providers package.

Hey future me - every provider here implements INotificationProvider and gets
registered in NotificationService. Right now there's only SMTP mail.
"""

from songcatalog.infrastructure.notifications.email_provider import (
    EmailNotificationProvider,
)

__all__ = [
    "EmailNotificationProvider",
]
