"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import ROLE_PUBLIC, Notification
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide the notification store operations used by the dispatcher and inbox."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def insert_many(self, notifications: Sequence[Notification]) -> list[Notification]:
        """Persist ``notifications`` in one transaction and return them with ids."""

        if not notifications:
            return []
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            models.append(model)
        try:
            self.session.add_all(models)
            self.session.flush()
            saved = [self._to_entity(model) for model in models]
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return saved

    def update_delivery_status(self, notification_id: int, status: str) -> None:
        self.update_delivery_status_many([notification_id], status)

    def update_delivery_status_many(
        self, notification_ids: Iterable[int], status: str
    ) -> None:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return
        self.session.query(NotificationModel).filter(
            NotificationModel.id.in_(ids)
        ).update(
            {NotificationModel.delivery_status: status},
            synchronize_session=False,
        )
        self.session.commit()

    def mark_read(
        self,
        notification_id: int,
        *,
        recipient_id: str,
        role: str,
        is_read: bool = True,
    ) -> Notification | None:
        """Set the read flag on a notification owned by ``(recipient_id, role)``."""

        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.recipient_role == role)
            .one_or_none()
        )
        if model is None:
            return None
        model.is_read = is_read
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_read(self, recipient_id: str, role: str) -> int:
        count = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.recipient_role == role)
            .filter(NotificationModel.is_read.is_(False))
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(count or 0)

    def list_for_recipient(
        self,
        recipient_id: str | None,
        role: str | None = None,
        *,
        unread_only: bool = False,
        category: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Notification], int]:
        """Return the recipient's notifications plus public ones, newest first.

        Public records cannot be marked read by anyone, so ``unread_only``
        leaves them out and matches :meth:`count_unread`.
        """

        owned = and_(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.recipient_role == role,
        )
        public = NotificationModel.recipient_role == ROLE_PUBLIC
        query = self.session.query(NotificationModel)
        if unread_only:
            if not recipient_id:
                return [], 0
            query = query.filter(owned).filter(NotificationModel.is_read.is_(False))
        elif recipient_id:
            query = query.filter(or_(owned, public))
        else:
            query = query.filter(public)
        if category:
            query = query.filter(NotificationModel.category == category)

        total = query.count()
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        models = query.offset(offset).limit(limit).all()
        return [self._to_entity(model) for model in models], total

    def count_unread(self, recipient_id: str, role: str) -> int:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.recipient_role == role)
            .filter(NotificationModel.is_read.is_(False))
            .count()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.recipient_id = notification.recipient_id
        model.recipient_role = notification.recipient_role
        model.event_type = notification.event_type
        model.category = notification.category
        model.priority = notification.priority
        model.title = notification.title
        model.message = notification.message
        model.action_url = notification.action_url
        model.metadata_ = dict(notification.metadata or {})
        model.is_read = notification.is_read
        model.delivery_status = notification.delivery_status
        model.channels = list(notification.channels)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            recipient_role=model.recipient_role,
            event_type=model.event_type,
            category=model.category,
            priority=model.priority,
            title=model.title,
            message=model.message,
            action_url=model.action_url,
            metadata=dict(model.metadata_ or {}),
            is_read=bool(model.is_read),
            delivery_status=model.delivery_status,
            channels=list(model.channels or []),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
