"""Collaborator interfaces consumed by the notification core."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from app.domain.entities import (
    AuthUser,
    Customer,
    Notification,
    Recipient,
    RecipientPreferences,
    Volunteer,
)

RecipientKey = tuple[str | None, str]


class ProfileStore(Protocol):
    """Identity namespaces and preference records owned by the wider application."""

    def list_volunteers(self) -> Sequence[Volunteer]: ...

    def list_customers(self) -> Sequence[Customer]: ...

    def list_admin_auth_users(self) -> Sequence[AuthUser]: ...

    def find_volunteer_by_identity(self, identity: str) -> Volunteer | None: ...

    def get_volunteer(self, volunteer_id: str) -> Volunteer | None: ...

    def get_customer(self, customer_id: str) -> Customer | None: ...

    def get_auth_user(self, user_id: str) -> AuthUser | None: ...

    def get_preferences(self, identity: str, role: str) -> RecipientPreferences | None: ...

    def get_preferences_many(
        self, recipients: Iterable[Recipient]
    ) -> dict[RecipientKey, RecipientPreferences | None]: ...

    def update_preferences(
        self, identity: str, role: str, preferences: RecipientPreferences
    ) -> RecipientPreferences: ...

    def get_emails(self, recipients: Iterable[Recipient]) -> dict[RecipientKey, str]: ...


class AddressBook(Protocol):
    """Delivery addresses for the external channels."""

    def get_emails(self, recipients: Iterable[Recipient]) -> dict[RecipientKey, str]: ...


class NotificationStore(Protocol):
    """Durable notification records."""

    def insert_many(self, notifications: Sequence[Notification]) -> list[Notification]: ...

    def update_delivery_status_many(self, notification_ids: Iterable[int], status: str) -> None: ...


class DeliveryStatusSink(Protocol):
    """Receives per-record delivery outcomes from worker threads."""

    def record(self, notification_id: int, status: str) -> None: ...


class RealtimePublisher(Protocol):
    def dispatch(self, notification: Notification) -> None: ...


__all__ = [
    "RecipientKey",
    "ProfileStore",
    "AddressBook",
    "NotificationStore",
    "DeliveryStatusSink",
    "RealtimePublisher",
]
