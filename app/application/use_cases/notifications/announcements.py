"""Administrative broadcasts: system announcements and admin alerts."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    EVENT_ADMIN_ACTION,
    EVENT_SYSTEM_ANNOUNCEMENT,
    NOTIFICATION_PRIORITIES,
    TargetingSpec,
    build_event_key,
)
from app.utils import now_in_app_timezone

from .classifier import classify
from .dispatcher import DispatchResult
from .pipeline import NotificationPipeline, build_pipeline


def create_system_announcement(
    session: Session,
    *,
    title: str,
    message: str,
    target_type: str,
    target_role: str | None = None,
    target_user_ids: Sequence[str] | None = None,
    action_url: str | None = None,
    priority: str | None = None,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    """Broadcast an announcement to everyone, one role or a list of identities.

    The ``all`` scope also produces one public record for visitors without an
    account. Raises :class:`TargetingError` for a malformed target before any
    lookup happens.
    """

    spec = TargetingSpec(
        scope=target_type,
        role=target_role,
        ids=tuple(target_user_ids or ()),
    )
    if priority is not None and priority not in NOTIFICATION_PRIORITIES:
        raise ValueError(f"Unknown priority '{priority}'")

    pipeline = pipeline if pipeline is not None else build_pipeline(session)
    recipients = pipeline.resolver.resolve(spec)
    policy = classify(EVENT_SYSTEM_ANNOUNCEMENT)
    effective_priority = priority or policy.priority
    sent_at = now_in_app_timezone()
    return pipeline.dispatcher.dispatch(
        recipients,
        event_type=EVENT_SYSTEM_ANNOUNCEMENT,
        title=title,
        message=message,
        category=policy.category,
        priority=effective_priority,
        channels=policy.channels,
        action_url=action_url,
        metadata={
            "priority": effective_priority,
            "target_type": spec.scope,
            "event_key": build_event_key(
                EVENT_SYSTEM_ANNOUNCEMENT, spec.scope, sent_at.isoformat()
            ),
        },
    )


def notify_admins(
    session: Session,
    *,
    title: str,
    message: str,
    action_url: str | None = None,
    metadata: dict[str, Any] | None = None,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    """Send an operational alert to every allow-listed administrator."""

    pipeline = pipeline if pipeline is not None else build_pipeline(session)
    policy = classify(EVENT_ADMIN_ACTION)
    return pipeline.dispatcher.dispatch(
        pipeline.resolver.admins(),
        event_type=EVENT_ADMIN_ACTION,
        title=title,
        message=message,
        category=policy.category,
        priority=policy.priority,
        channels=policy.channels,
        action_url=action_url,
        metadata=dict(metadata or {}),
    )


__all__ = ["create_system_announcement", "notify_admins"]
