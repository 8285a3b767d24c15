"""Record channel delivery outcomes from worker threads."""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


class DeliveryStatusRecorder:
    """Write delivery statuses using a short-lived session per update."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def record(self, notification_id: int, status: str) -> None:
        session = self._session_factory()
        try:
            NotificationRepository(session).update_delivery_status(notification_id, status)
        except SQLAlchemyError:
            session.rollback()
            logger.exception(
                "Could not record delivery status %s for notification %s",
                status,
                notification_id,
            )
        finally:
            session.close()


__all__ = ["DeliveryStatusRecorder"]
