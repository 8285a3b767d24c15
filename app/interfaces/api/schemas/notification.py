"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import Notification, RecipientPreferences

TargetType = Literal["all", "role", "individual"]
TargetRole = Literal["volunteer", "customer", "admin"]
Priority = Literal["critical", "high", "medium", "low"]


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: str | None
    recipient_role: str
    event_type: str
    category: str
    priority: str
    title: str
    message: str
    action_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    delivery_status: str
    channels: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id or 0,
            recipient_id=notification.recipient_id,
            recipient_role=notification.recipient_role,
            event_type=notification.event_type,
            category=notification.category,
            priority=notification.priority,
            title=notification.title,
            message=notification.message,
            action_url=notification.action_url,
            metadata=notification.metadata or {},
            is_read=notification.is_read,
            delivery_status=notification.delivery_status,
            channels=list(notification.channels),
            created_at=notification.created_at,
        )


class NotificationPage(BaseModel):
    items: list[NotificationRead]
    total: int
    unread_count: int
    limit: int
    offset: int


class NotificationReadStateUpdate(BaseModel):
    is_read: bool = True

    model_config = ConfigDict(extra="forbid")


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int


class NotificationPreferencesRead(BaseModel):
    push_notifications: bool
    email_notifications: bool
    order_updates: bool
    payment_updates: bool
    delivery_updates: bool
    challenge_milestones: bool
    system_alerts: bool
    promotional: bool
    is_default: bool = False

    @classmethod
    def from_entity(cls, preferences: RecipientPreferences) -> "NotificationPreferencesRead":
        return cls(**preferences.to_mapping(), is_default=preferences.is_default)


class NotificationPreferencesUpdate(BaseModel):
    """Partial update; omitted flags keep their current value."""

    push_notifications: bool | None = None
    email_notifications: bool | None = None
    order_updates: bool | None = None
    payment_updates: bool | None = None
    delivery_updates: bool | None = None
    challenge_milestones: bool | None = None
    system_alerts: bool | None = None
    promotional: bool | None = None

    model_config = ConfigDict(extra="forbid")


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    target_type: TargetType
    target_role: TargetRole | None = None
    target_user_ids: list[str] | None = None
    action_url: str | None = None
    priority: Priority | None = None


class AdminAlertCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    action_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class DispatchSummary(BaseModel):
    """Outcome of a broadcast; ``count`` equals the records created."""

    count: int
    created: int
    suppressed: int


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
