"""Domain entity representing a persisted notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ROLE_ADMIN = "admin"
ROLE_VOLUNTEER = "volunteer"
ROLE_CUSTOMER = "customer"
ROLE_PUBLIC = "public"
RECIPIENT_ROLES = (ROLE_ADMIN, ROLE_VOLUNTEER, ROLE_CUSTOMER, ROLE_PUBLIC)

CATEGORY_ORDER = "order"
CATEGORY_DELIVERY = "delivery"
CATEGORY_ACHIEVEMENT = "achievement"
CATEGORY_ZONE = "zone"
CATEGORY_SYSTEM = "system"
CATEGORY_ADMIN = "admin"
NOTIFICATION_CATEGORIES = (
    CATEGORY_ORDER,
    CATEGORY_DELIVERY,
    CATEGORY_ACHIEVEMENT,
    CATEGORY_ZONE,
    CATEGORY_SYSTEM,
    CATEGORY_ADMIN,
)

PRIORITY_CRITICAL = "critical"
PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
NOTIFICATION_PRIORITIES = (
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    PRIORITY_LOW,
)

DELIVERY_STATUS_PENDING = "pending"
DELIVERY_STATUS_SENT = "sent"
DELIVERY_STATUS_FAILED = "failed"

CHANNEL_IN_APP = "in_app"
CHANNEL_EMAIL = "email"
CHANNEL_SMS = "sms"


@dataclass
class Notification:
    """Message addressed to one recipient or to the public bucket.

    ``recipient_id`` is ``None`` exactly when ``recipient_role`` is ``public``.
    ``priority`` and ``category`` are fixed at creation; only ``is_read`` is
    changed by the recipient and ``delivery_status`` by the delivery path.
    """

    id: int | None
    recipient_id: str | None
    recipient_role: str
    event_type: str
    category: str
    priority: str
    title: str
    message: str
    action_url: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    delivery_status: str = DELIVERY_STATUS_PENDING
    channels: list[str] = field(default_factory=lambda: [CHANNEL_IN_APP])
    created_at: datetime | None = None

    @property
    def is_public(self) -> bool:
        return self.recipient_role == ROLE_PUBLIC

    @property
    def external_channels(self) -> list[str]:
        """Channels that require a sender beyond the in-app record."""

        return [channel for channel in self.channels if channel != CHANNEL_IN_APP]


__all__ = [
    "Notification",
    "ROLE_ADMIN",
    "ROLE_VOLUNTEER",
    "ROLE_CUSTOMER",
    "ROLE_PUBLIC",
    "RECIPIENT_ROLES",
    "CATEGORY_ORDER",
    "CATEGORY_DELIVERY",
    "CATEGORY_ACHIEVEMENT",
    "CATEGORY_ZONE",
    "CATEGORY_SYSTEM",
    "CATEGORY_ADMIN",
    "NOTIFICATION_CATEGORIES",
    "PRIORITY_CRITICAL",
    "PRIORITY_HIGH",
    "PRIORITY_MEDIUM",
    "PRIORITY_LOW",
    "NOTIFICATION_PRIORITIES",
    "DELIVERY_STATUS_PENDING",
    "DELIVERY_STATUS_SENT",
    "DELIVERY_STATUS_FAILED",
    "CHANNEL_IN_APP",
    "CHANNEL_EMAIL",
    "CHANNEL_SMS",
]
