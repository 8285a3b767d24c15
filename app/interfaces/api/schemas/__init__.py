from .notification import (
    AdminAlertCreate,
    AnnouncementCreate,
    DispatchSummary,
    MarkAllReadResponse,
    NotificationPage,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    NotificationRead,
    NotificationReadStateUpdate,
    UnreadCountResponse,
)

__all__ = [
    "AdminAlertCreate",
    "AnnouncementCreate",
    "DispatchSummary",
    "MarkAllReadResponse",
    "NotificationPage",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "NotificationReadStateUpdate",
    "UnreadCountResponse",
]
