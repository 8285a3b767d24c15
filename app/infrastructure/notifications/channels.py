"""Channel senders used by the dispatcher beyond the in-app record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urljoin

from app.config import get_settings
from app.domain.entities import CHANNEL_EMAIL, CHANNEL_SMS, Notification
from app.infrastructure import email as email_module

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelSendResult:
    """Outcome reported by a channel sender."""

    success: bool
    error: str | None = None


class ChannelSender(Protocol):
    """Delivery medium for one channel."""

    channel: str

    def is_configured(self) -> bool:
        """Return ``False`` when the channel must be skipped entirely."""

    def send(self, notification: Notification, address: str) -> ChannelSendResult:
        """Deliver ``notification`` to ``address``."""


class EmailChannelSender:
    """Send notifications as HTML email through SendGrid."""

    channel = CHANNEL_EMAIL

    def is_configured(self) -> bool:
        return email_module.is_email_configured()

    def send(self, notification: Notification, address: str) -> ChannelSendResult:
        result = email_module.send_notification_email(
            address,
            notification.title,
            notification.title,
            notification.message,
            action_url=absolute_action_url(notification.action_url),
            priority=notification.priority,
        )
        return ChannelSendResult(success=result.success, error=result.error)


class SmsChannelSender:
    """Placeholder for SMS delivery; never configured."""

    channel = CHANNEL_SMS

    def is_configured(self) -> bool:
        return False

    def send(self, notification: Notification, address: str) -> ChannelSendResult:
        logger.warning("SMS delivery requested for notification %s but SMS is not available", notification.id)
        return ChannelSendResult(success=False, error="SMS channel not available")


def absolute_action_url(action_url: str | None) -> str | None:
    """Prefix relative action references with the configured public base URL."""

    if not action_url:
        return None
    base_url = get_settings().public_base_url
    if not base_url or "://" in action_url:
        return action_url
    return urljoin(base_url.rstrip("/") + "/", action_url.lstrip("/"))


def default_channel_senders() -> dict[str, ChannelSender]:
    """Return the sender registry keyed by channel name."""

    return {CHANNEL_EMAIL: EmailChannelSender(), CHANNEL_SMS: SmsChannelSender()}


__all__ = [
    "ChannelSendResult",
    "ChannelSender",
    "EmailChannelSender",
    "SmsChannelSender",
    "absolute_action_url",
    "default_channel_senders",
]
