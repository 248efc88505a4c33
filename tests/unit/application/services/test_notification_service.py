"""Unit tests for NotificationService.

Hey future me - these tests verify the notification service works correctly!
Tests are split into:
1. Logging-only mode (no provider configured)
2. Provider fan-out (with mock providers)
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from songcatalog.application.services.notification_service import NotificationService
from songcatalog.domain.entities import Song
from songcatalog.domain.ports.notification import (
    Notification,
    NotificationPriority,
    NotificationResult,
    NotificationType,
)


def _provider(name: str, success: bool = True, configured: bool = True) -> MagicMock:
    provider = MagicMock()
    provider.name = name
    provider.supports.return_value = True
    provider.is_configured = AsyncMock(return_value=configured)
    provider.send = AsyncMock(
        return_value=NotificationResult(
            success=success,
            provider_name=name,
            notification_type=NotificationType.SONG_CREATED,
            error=None if success else "Failed",
        )
    )
    return provider


class TestLoggingOnlyMode:
    """No providers: the notification only goes to the log."""

    @pytest.fixture
    def service(self) -> NotificationService:
        return NotificationService()

    @pytest.fixture
    def mock_logger(self) -> MagicMock:
        return MagicMock(spec=logging.Logger)

    async def test_song_created_is_logged(
        self, service: NotificationService, mock_logger: MagicMock
    ) -> None:
        with patch(
            "songcatalog.application.services.notification_service.logger", mock_logger
        ):
            result = await service.send_song_created_notification(
                Song(id=7, version=0, title="Imagine")
            )

        assert result is True
        mock_logger.info.assert_called_once()
        message = mock_logger.info.call_args[0][0]
        assert "[NOTIFICATION]" in message
        assert "New song 7" in message
        assert "<strong>Imagine</strong>" in message

    async def test_init_providers_empty(self, service: NotificationService) -> None:
        assert await service._init_providers() == []


class TestWithProviders:
    """Fan-out to configured providers."""

    async def test_song_created_subject_and_body(self) -> None:
        provider = _provider("email")
        service = NotificationService([provider])

        result = await service.send_song_created_notification(
            Song(id=3, version=0, title="Rock & Roll")
        )

        assert result is True
        notification = provider.send.call_args[0][0]
        assert isinstance(notification, Notification)
        assert notification.type == NotificationType.SONG_CREATED
        assert notification.title == "New song 3"
        assert notification.message == (
            "The song with the title <strong>Rock &amp; Roll</strong> has been created"
        )
        assert notification.priority == NotificationPriority.NORMAL

    async def test_unconfigured_provider_is_skipped(self) -> None:
        provider = _provider("email", configured=False)
        service = NotificationService([provider])

        assert await service.send_notification(NotificationType.SONG_CREATED, "t", "m") is True
        provider.send.assert_not_called()

    async def test_provider_check_error_is_skipped(self) -> None:
        provider = _provider("email")
        provider.is_configured.side_effect = RuntimeError("boom")
        service = NotificationService([provider])

        assert await service._init_providers() == []

    async def test_all_providers_fail(self) -> None:
        service = NotificationService([_provider("email", success=False)])

        assert await service.send_notification(NotificationType.SONG_CREATED, "t", "m") is False

    async def test_partial_success(self) -> None:
        ok = _provider("ok")
        failing = _provider("fail", success=False)
        service = NotificationService([ok, failing])

        assert await service.send_notification(NotificationType.SONG_CREATED, "t", "m") is True
        ok.send.assert_awaited_once()
        failing.send.assert_awaited_once()

    async def test_raising_provider_becomes_failed_result(self) -> None:
        provider = _provider("email")
        provider.send.side_effect = ConnectionError("smtp down")
        service = NotificationService([provider])

        results = await service._send_to_providers(
            Notification(type=NotificationType.SONG_CREATED, title="t", message="m"), [provider]
        )

        assert len(results) == 1
        assert results[0].success is False
        assert results[0].provider_name == "email"
        assert "smtp down" in (results[0].error or "")

    async def test_providers_checked_once(self) -> None:
        provider = _provider("email")
        service = NotificationService([provider])

        await service._init_providers()
        await service._init_providers()
        assert provider.is_configured.await_count == 1

    def test_song_created_is_the_only_type(self) -> None:
        assert [t.value for t in NotificationType] == ["song_created"]
        assert not hasattr(NotificationService, "invalidate_providers")
