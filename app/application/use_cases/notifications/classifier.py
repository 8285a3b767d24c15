"""Static priority and channel policy per event type."""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities import (
    CATEGORY_ACHIEVEMENT,
    CATEGORY_ADMIN,
    CATEGORY_DELIVERY,
    CATEGORY_ORDER,
    CATEGORY_SYSTEM,
    CATEGORY_ZONE,
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    EVENT_ADMIN_ACTION,
    EVENT_CHALLENGE_MILESTONE,
    EVENT_DELIVERY_REQUEST_UPDATE,
    EVENT_DELIVERY_UPDATE,
    EVENT_ORDER_CANCELLED,
    EVENT_ORDER_CREATED,
    EVENT_ORDER_UPDATE,
    EVENT_PAYMENT_FAILED,
    EVENT_PAYMENT_VERIFIED,
    EVENT_REFERRAL_UPDATE,
    EVENT_SYSTEM_ANNOUNCEMENT,
    EVENT_ZONE_ASSIGNED,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_DELIVERED,
    ORDER_STATUS_OUT_FOR_DELIVERY,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
)

IN_APP_ONLY = (CHANNEL_IN_APP,)
IN_APP_AND_EMAIL = (CHANNEL_IN_APP, CHANNEL_EMAIL)

# Order statuses worth a transactional email to the customer.
EMAIL_WORTHY_ORDER_STATUSES = frozenset(
    {ORDER_STATUS_CONFIRMED, ORDER_STATUS_DELIVERED, ORDER_STATUS_OUT_FOR_DELIVERY}
)
DELIVERY_STATUS_ASSIGNED = "assigned"


@dataclass(frozen=True)
class Classification:
    """Category, priority and channels assigned to one event."""

    category: str
    priority: str
    channels: tuple[str, ...]


_STATIC_POLICY: dict[str, Classification] = {
    EVENT_PAYMENT_FAILED: Classification(CATEGORY_ORDER, PRIORITY_CRITICAL, IN_APP_AND_EMAIL),
    EVENT_ORDER_CANCELLED: Classification(CATEGORY_ORDER, PRIORITY_HIGH, IN_APP_AND_EMAIL),
    EVENT_REFERRAL_UPDATE: Classification(CATEGORY_ORDER, PRIORITY_MEDIUM, IN_APP_ONLY),
    EVENT_PAYMENT_VERIFIED: Classification(CATEGORY_ORDER, PRIORITY_HIGH, IN_APP_AND_EMAIL),
    EVENT_DELIVERY_REQUEST_UPDATE: Classification(CATEGORY_DELIVERY, PRIORITY_MEDIUM, IN_APP_ONLY),
    EVENT_CHALLENGE_MILESTONE: Classification(CATEGORY_ACHIEVEMENT, PRIORITY_MEDIUM, IN_APP_AND_EMAIL),
    EVENT_ZONE_ASSIGNED: Classification(CATEGORY_ZONE, PRIORITY_MEDIUM, IN_APP_ONLY),
    EVENT_SYSTEM_ANNOUNCEMENT: Classification(CATEGORY_SYSTEM, PRIORITY_MEDIUM, IN_APP_ONLY),
    EVENT_ORDER_CREATED: Classification(CATEGORY_ADMIN, PRIORITY_HIGH, IN_APP_ONLY),
}

_FALLBACK = Classification(CATEGORY_SYSTEM, PRIORITY_LOW, IN_APP_ONLY)


def classify(event_type: str, status: str | None = None) -> Classification:
    """Return the policy for ``event_type``; ``status`` refines status-driven events."""

    if event_type == EVENT_ORDER_UPDATE:
        if status in EMAIL_WORTHY_ORDER_STATUSES:
            return Classification(CATEGORY_ORDER, PRIORITY_HIGH, IN_APP_AND_EMAIL)
        return Classification(CATEGORY_ORDER, PRIORITY_MEDIUM, IN_APP_ONLY)
    if event_type == EVENT_DELIVERY_UPDATE:
        if status == DELIVERY_STATUS_ASSIGNED:
            return Classification(CATEGORY_DELIVERY, PRIORITY_HIGH, IN_APP_AND_EMAIL)
        return Classification(CATEGORY_DELIVERY, PRIORITY_MEDIUM, IN_APP_ONLY)
    if event_type == EVENT_ADMIN_ACTION:
        if status == EVENT_PAYMENT_FAILED:
            return Classification(CATEGORY_ADMIN, PRIORITY_CRITICAL, IN_APP_ONLY)
        return Classification(CATEGORY_ADMIN, PRIORITY_HIGH, IN_APP_ONLY)
    return _STATIC_POLICY.get(event_type, _FALLBACK)


__all__ = [
    "Classification",
    "DELIVERY_STATUS_ASSIGNED",
    "EMAIL_WORTHY_ORDER_STATUSES",
    "classify",
]
