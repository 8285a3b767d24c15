"""Event types that can trigger notifications."""

EVENT_ORDER_CREATED = "order_created"
EVENT_ORDER_UPDATE = "order_update"
EVENT_ORDER_CANCELLED = "order_cancelled"
EVENT_REFERRAL_UPDATE = "referral_update"
EVENT_PAYMENT_FAILED = "payment_failed"
EVENT_PAYMENT_VERIFIED = "payment_verified"
EVENT_DELIVERY_UPDATE = "delivery_update"
EVENT_DELIVERY_REQUEST_UPDATE = "delivery_request_update"
EVENT_CHALLENGE_MILESTONE = "challenge_milestone"
EVENT_ZONE_ASSIGNED = "zone_assigned"
EVENT_SYSTEM_ANNOUNCEMENT = "system_announcement"
EVENT_ADMIN_ACTION = "admin_action"

EVENT_TYPES = (
    EVENT_ORDER_CREATED,
    EVENT_ORDER_UPDATE,
    EVENT_ORDER_CANCELLED,
    EVENT_REFERRAL_UPDATE,
    EVENT_PAYMENT_FAILED,
    EVENT_PAYMENT_VERIFIED,
    EVENT_DELIVERY_UPDATE,
    EVENT_DELIVERY_REQUEST_UPDATE,
    EVENT_CHALLENGE_MILESTONE,
    EVENT_ZONE_ASSIGNED,
    EVENT_SYSTEM_ANNOUNCEMENT,
    EVENT_ADMIN_ACTION,
)

# Delivered regardless of stored preferences.
CRITICAL_EVENT_TYPES = frozenset({EVENT_PAYMENT_FAILED, EVENT_ORDER_CANCELLED})


def build_event_key(event_type: str, entity_id: object, status: str | None = None) -> str:
    """Return the key stamped on notifications produced for one business event."""

    parts = [event_type, str(entity_id)]
    if status:
        parts.append(status)
    return ":".join(parts)


__all__ = [
    "EVENT_ORDER_CREATED",
    "EVENT_ORDER_UPDATE",
    "EVENT_ORDER_CANCELLED",
    "EVENT_REFERRAL_UPDATE",
    "EVENT_PAYMENT_FAILED",
    "EVENT_PAYMENT_VERIFIED",
    "EVENT_DELIVERY_UPDATE",
    "EVENT_DELIVERY_REQUEST_UPDATE",
    "EVENT_CHALLENGE_MILESTONE",
    "EVENT_ZONE_ASSIGNED",
    "EVENT_SYSTEM_ANNOUNCEMENT",
    "EVENT_ADMIN_ACTION",
    "EVENT_TYPES",
    "CRITICAL_EVENT_TYPES",
    "build_event_key",
]
