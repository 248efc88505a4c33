"""SMTP email notification provider.

Hey future me - this sends notifications as HTML mails through a plain SMTP relay
(MailHog, Postfix sidecar, whatever sits at MAIL__HOST:MAIL__PORT). smtplib is
blocking, so the actual send runs in a worker thread via asyncio.to_thread and
never stalls the event loop.

Configure via env:
- MAIL__ENABLED
- MAIL__HOST / MAIL__PORT
- MAIL__SENDER / MAIL__RECIPIENT
- MAIL__TIMEOUT (seconds)
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from songcatalog.config import MailSettings
from songcatalog.domain.ports.notification import (
    INotificationProvider,
    Notification,
    NotificationResult,
    NotificationType,
)

logger = logging.getLogger(__name__)


class EmailNotificationProvider(INotificationProvider):
    """Email notification provider using SMTP.

    Notification.title becomes the subject, Notification.message the HTML body.
    """

    def __init__(self, settings: MailSettings) -> None:
        """Initialize with the mail settings section.

        Args:
            settings: SMTP host/port, sender/recipient and timeout
        """
        self._settings = settings

    @property
    def name(self) -> str:
        """Provider name."""
        return "email"

    @property
    def supported_types(self) -> list[NotificationType]:
        """Email supports all notification types."""
        return []

    async def is_configured(self) -> bool:
        """Check if mail sending is enabled and has a relay and recipient."""
        return bool(
            self._settings.enabled
            and self._settings.host.strip()
            and self._settings.recipient.strip()
        )

    async def send(self, notification: Notification) -> NotificationResult:
        """Send notification as mail.

        Args:
            notification: Notification to send

        Returns:
            NotificationResult with success status and the Message-ID
        """
        if not await self.is_configured():
            return NotificationResult(
                success=False,
                provider_name=self.name,
                notification_type=notification.type,
                error="Email provider not configured",
            )

        message = self._build_message(notification)

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[NOTIFICATION] Email failed: {e}")
            return NotificationResult(
                success=False,
                provider_name=self.name,
                notification_type=notification.type,
                error=str(e),
            )

        logger.info(
            f"[NOTIFICATION] Email sent to {self._settings.recipient}: "
            f"{notification.title[:50]}"
        )
        return NotificationResult(
            success=True,
            provider_name=self.name,
            notification_type=notification.type,
            external_id=message["Message-ID"],
        )

    def _build_message(self, notification: Notification) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = notification.title
        message["From"] = self._settings.sender
        message["To"] = self._settings.recipient
        message["Message-ID"] = make_msgid(domain="songcatalog")
        message.set_content(notification.message, subtype="html")
        return message

    # Runs inside the worker thread - keep it free of anything touching the event loop.
    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self._settings.host,
            self._settings.port,
            timeout=self._settings.timeout,
        ) as smtp:
            smtp.send_message(message)
