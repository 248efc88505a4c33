"""Notification service for sending notifications through multiple providers.

Hey future me - this is the MAIN ENTRY POINT for notifications!
The write service calls send_song_created_notification() AFTER the create commit.
Every notification is sent to ALL configured providers (today: SMTP mail).

Usage:
    notification_service = NotificationService([EmailNotificationProvider(settings.mail)])
    await notification_service.send_song_created_notification(song)

The service will:
1. Filter the handed-in providers down to the configured ones (once, cached)
2. Build the Notification object
3. Send to all of them in parallel
4. Log results and return success status

No providers configured = logging-only mode. The notification is still written to the
log with the [NOTIFICATION] prefix, so dev setups without an SMTP relay lose nothing.
"""

import asyncio
import logging
from collections.abc import Sequence
from html import escape
from typing import Any

from songcatalog.domain.entities import Song
from songcatalog.domain.ports.notification import (
    INotificationProvider,
    Notification,
    NotificationPriority,
    NotificationResult,
    NotificationType,
)

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for sending notifications through multiple providers.

    Providers are filtered lazily on first use and cached for the lifetime of the service.
    """

    def __init__(self, providers: Sequence[INotificationProvider] | None = None) -> None:
        """Initialize notification service.

        Args:
            providers: Candidate providers. None or empty means logging-only mode.
        """
        self._candidates = list(providers or [])
        self._providers: list[INotificationProvider] | None = None

    async def _init_providers(self) -> list[INotificationProvider]:
        if self._providers is not None:
            return self._providers

        self._providers = []
        for provider in self._candidates:
            try:
                if await provider.is_configured():
                    self._providers.append(provider)
                    logger.debug(f"[NOTIFICATION] Provider enabled: {provider.name}")
            except Exception as e:
                logger.warning(f"[NOTIFICATION] Failed to check provider {provider.name}: {e}")

        if not self._providers:
            logger.debug("[NOTIFICATION] No providers configured, logging-only mode")
        return self._providers

    async def send_notification(
        self,
        notification_type: NotificationType,
        title: str,
        message: str,
        priority: NotificationPriority = NotificationPriority.NORMAL,
        data: dict[str, Any] | None = None,
    ) -> bool:
        """Send notification to all configured providers.

        Args:
            notification_type: Type of notification
            title: Short title (mail subject)
            message: Full message body (HTML for mail)
            priority: Priority level
            data: Optional additional data

        Returns:
            True if at least one provider succeeded, or nothing but the log was configured
        """
        notification = Notification(
            type=notification_type,
            title=title,
            message=message,
            priority=priority,
            data=data or {},
        )

        logger.info(f"[NOTIFICATION] {notification_type.value}: {title} - {message[:100]}")

        providers = await self._init_providers()
        if not providers:
            return True

        results = await self._send_to_providers(notification, providers)

        successes = sum(1 for r in results if r.success)
        failures = [r.provider_name for r in results if not r.success]
        if failures:
            logger.warning(
                f"[NOTIFICATION] {successes}/{len(results)} providers succeeded, "
                f"failed: {failures}"
            )

        return successes > 0

    async def _send_to_providers(
        self, notification: Notification, providers: list[INotificationProvider]
    ) -> list[NotificationResult]:
        """Send notification to multiple providers in parallel.

        Hey future me - one slow SMTP relay won't block the others.
        """
        targets = [p for p in providers if p.supports(notification.type)]
        if not targets:
            return []

        results = await asyncio.gather(
            *(provider.send(notification) for provider in targets),
            return_exceptions=True,
        )

        final_results: list[NotificationResult] = []
        for provider, result in zip(targets, results, strict=True):
            if isinstance(result, BaseException):
                logger.error(f"[NOTIFICATION] Provider {provider.name} error: {result}")
                final_results.append(
                    NotificationResult(
                        success=False,
                        provider_name=provider.name,
                        notification_type=notification.type,
                        error=str(result),
                    )
                )
            else:
                final_results.append(result)

        return final_results

    async def send_song_created_notification(self, song: Song) -> bool:
        """Announce a freshly created song.

        Args:
            song: The created song (id must be set)

        Returns:
            True if the notification was sent successfully
        """
        return await self.send_notification(
            notification_type=NotificationType.SONG_CREATED,
            title=f"New song {song.id}",
            message=(
                f"The song with the title <strong>{escape(song.title)}</strong> "
                "has been created"
            ),
            priority=NotificationPriority.NORMAL,
            data={"song_id": song.id, "title": song.title},
        )
