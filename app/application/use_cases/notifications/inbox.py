"""Recipient-side inbox queries and read-state changes.

Every operation is scoped to the ``(recipient_id, role)`` pair, since the same
identity may exist as a volunteer and a customer at once.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import NOTIFICATION_CATEGORIES, Notification
from app.infrastructure.repositories import NotificationRepository

from .errors import NotificationNotFoundError

MAX_PAGE_SIZE = 100


def list_notifications(
    session: Session,
    *,
    recipient_id: str | None,
    role: str | None = None,
    unread_only: bool = False,
    category: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Notification], int]:
    """Return one page of the recipient's inbox and the total number of matches.

    Public notifications are part of every inbox; an anonymous caller
    (``recipient_id`` of ``None``) sees only those.
    """

    if category is not None and category not in NOTIFICATION_CATEGORIES:
        raise ValueError(f"Unknown category '{category}'")
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    offset = max(0, offset)
    return NotificationRepository(session).list_for_recipient(
        recipient_id,
        role,
        unread_only=unread_only,
        category=category,
        limit=limit,
        offset=offset,
    )


def mark_notification_read(
    session: Session,
    *,
    notification_id: int,
    recipient_id: str,
    role: str,
    is_read: bool = True,
) -> Notification:
    notification = NotificationRepository(session).mark_read(
        notification_id, recipient_id=recipient_id, role=role, is_read=is_read
    )
    if notification is None:
        raise NotificationNotFoundError(f"Notification {notification_id} not found")
    return notification


def mark_all_notifications_read(session: Session, *, recipient_id: str, role: str) -> int:
    return NotificationRepository(session).mark_all_read(recipient_id, role)


def count_unread_notifications(session: Session, *, recipient_id: str, role: str) -> int:
    return NotificationRepository(session).count_unread(recipient_id, role)


__all__ = [
    "MAX_PAGE_SIZE",
    "count_unread_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
