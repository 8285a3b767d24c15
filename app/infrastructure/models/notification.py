"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._types import json_type


class NotificationModel(Base):
    """Database representation for recipient notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_recipient_read", "recipient_id", "is_read"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # NULL only for the public bucket.
    recipient_id = Column(String(64), nullable=True, index=True)
    recipient_role = Column(String(20), nullable=False, index=True)
    event_type = Column(String(50), nullable=False)
    category = Column(String(20), nullable=False)
    priority = Column(String(20), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    action_url = Column(String(500), nullable=True)
    metadata_ = Column("metadata", json_type, nullable=False, default=dict)
    is_read = Column(Boolean, nullable=False, default=False)
    delivery_status = Column(String(20), nullable=False, default="pending")
    channels = Column(json_type, nullable=False, default=list)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
