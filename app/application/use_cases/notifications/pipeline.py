"""Wire the resolver, gate and dispatcher for one request-scoped session."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from app.config import get_settings
from app.infrastructure.notifications import (
    ChannelDeliveryPool,
    ChannelSender,
    DeliveryStatusRecorder,
    default_channel_senders,
    get_delivery_pool,
    notification_publisher,
)
from app.infrastructure.repositories import NotificationRepository, ProfileRepository

from .dispatcher import Dispatcher
from .gate import PreferenceGate
from .ports import DeliveryStatusSink, RealtimePublisher
from .resolver import RecipientResolver


@dataclass
class NotificationPipeline:
    resolver: RecipientResolver
    gate: PreferenceGate
    dispatcher: Dispatcher


def build_pipeline(
    session: Session,
    *,
    senders: Mapping[str, ChannelSender] | None = None,
    pool: ChannelDeliveryPool | None = None,
    status_sink: DeliveryStatusSink | None = None,
    publisher: RealtimePublisher | None = notification_publisher,
    admin_emails: frozenset[str] | None = None,
) -> NotificationPipeline:
    """Return a pipeline backed by ``session``; collaborators default to the shared ones."""

    profiles = ProfileRepository(session)
    if admin_emails is None:
        admin_emails = get_settings().admin_allow_list()
    if status_sink is None:
        # Worker threads record outcomes on their own sessions against the same engine.
        status_sink = DeliveryStatusRecorder(
            sessionmaker(bind=session.get_bind(), autoflush=False, expire_on_commit=False)
        )
    gate = PreferenceGate(profiles)
    dispatcher = Dispatcher(
        store=NotificationRepository(session),
        gate=gate,
        senders=senders if senders is not None else default_channel_senders(),
        pool=pool if pool is not None else get_delivery_pool(),
        status_sink=status_sink,
        address_book=profiles,
        publisher=publisher,
    )
    return NotificationPipeline(
        resolver=RecipientResolver(profiles, admin_emails=admin_emails),
        gate=gate,
        dispatcher=dispatcher,
    )


__all__ = ["NotificationPipeline", "build_pipeline"]
