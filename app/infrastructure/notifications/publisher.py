"""Push freshly persisted notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

from anyio import from_thread

from app.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their websocket delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._tasks: set[asyncio.Task] = set()

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` for its ``(id, role)`` pair, or everyone if public."""

        message = {"type": "notification", "data": serialize_notification(notification)}
        if notification.is_public:
            self._schedule(self._manager.broadcast, message)
        elif notification.recipient_id:
            self._schedule(
                self._manager.send_to_recipient,
                (notification.recipient_id, notification.recipient_role),
                message,
            )

    def _schedule(self, func, *args: Any) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._spawn, func, *args)
            except RuntimeError:
                # Not inside the application's event loop worker; nobody can be listening.
                logger.debug("No event loop available for realtime notification push")
        else:
            self._spawn(func, *args)

    def _spawn(self, func: Callable[..., Coroutine[Any, Any, None]], *args: Any) -> None:
        task = asyncio.get_running_loop().create_task(func(*args))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON representation pushed to websocket clients."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "recipient_role": notification.recipient_role,
        "event_type": notification.event_type,
        "category": notification.category,
        "priority": notification.priority,
        "title": notification.title,
        "message": notification.message,
        "action_url": notification.action_url,
        "metadata": notification.metadata or {},
        "is_read": notification.is_read,
        "delivery_status": notification.delivery_status,
        "channels": list(notification.channels),
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
]
