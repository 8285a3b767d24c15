"""Notification targeting, gating, classification and dispatch."""

from .announcements import create_system_announcement, notify_admins
from .classifier import Classification, classify
from .dispatcher import Dispatcher, DispatchResult
from .errors import NotificationNotFoundError
from .events import (
    milestone_copy,
    notify_challenge_milestone,
    notify_delivery_assigned,
    notify_delivery_completed,
    notify_delivery_request_update,
    notify_order_created,
    notify_order_status_change,
    notify_payment_failed,
    notify_payment_verified,
    notify_zone_assigned,
)
from .gate import PreferenceGate, is_critical
from .inbox import (
    count_unread_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .pipeline import NotificationPipeline, build_pipeline
from .preferences import get_preferences, update_preferences
from .resolver import RecipientResolver, dedupe

__all__ = [
    "Classification",
    "classify",
    "Dispatcher",
    "DispatchResult",
    "NotificationNotFoundError",
    "NotificationPipeline",
    "build_pipeline",
    "PreferenceGate",
    "is_critical",
    "RecipientResolver",
    "dedupe",
    "milestone_copy",
    "notify_order_created",
    "notify_order_status_change",
    "notify_payment_failed",
    "notify_payment_verified",
    "notify_delivery_assigned",
    "notify_delivery_completed",
    "notify_challenge_milestone",
    "notify_zone_assigned",
    "notify_delivery_request_update",
    "create_system_announcement",
    "notify_admins",
    "list_notifications",
    "mark_notification_read",
    "mark_all_notifications_read",
    "count_unread_notifications",
    "get_preferences",
    "update_preferences",
]
