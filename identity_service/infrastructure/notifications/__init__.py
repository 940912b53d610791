"""Notification adapters."""

from identity_service.infrastructure.notifications.stub_notification_service import (
    StubNotificationService,
)

__all__ = ["StubNotificationService"]
