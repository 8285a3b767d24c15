"""Persist notification records and fan out channel deliveries."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import Future, wait
from dataclasses import dataclass, field
from typing import Any

from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_PENDING,
    DELIVERY_STATUS_SENT,
    Notification,
    Recipient,
)
from app.infrastructure.notifications import ChannelDeliveryPool, ChannelSender, ChannelSendResult
from app.utils import now_in_app_timezone

from .gate import PreferenceGate
from .ports import AddressBook, DeliveryStatusSink, NotificationStore, RealtimePublisher
from .resolver import dedupe

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of one dispatch call.

    ``created`` and ``suppressed`` are final when :meth:`Dispatcher.dispatch`
    returns. ``failed`` grows as channel deliveries finish; call :meth:`wait`
    to observe the settled value.
    """

    created: int = 0
    suppressed: int = 0
    notifications: list[Notification] = field(default_factory=list)
    deliveries: list[Future] = field(default_factory=list)
    _failed: int = field(default=0, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def failed(self) -> int:
        with self._lock:
            return self._failed

    def record_failure(self) -> None:
        with self._lock:
            self._failed += 1

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every channel delivery settled; ``False`` on timeout."""

        if not self.deliveries:
            return True
        _, not_done = wait(self.deliveries, timeout=timeout)
        return not not_done

    def merge(self, other: "DispatchResult") -> "DispatchResult":
        """Fold ``other`` into this result and return ``self``."""

        self.created += other.created
        self.suppressed += other.suppressed
        self.notifications.extend(other.notifications)
        self.deliveries.extend(other.deliveries)
        failed = other.failed
        with self._lock:
            self._failed += failed
        return self


class _RecordDelivery:
    """Collect the channel outcomes of one record and report its final status."""

    def __init__(
        self,
        notification: Notification,
        pending: int,
        sink: DeliveryStatusSink,
        result: DispatchResult,
    ) -> None:
        self.notification = notification
        self._pending = pending
        self._failed = False
        self._sink = sink
        self._result = result
        self._lock = threading.Lock()

    def finish(self, channel: str, success: bool, error: str | None = None) -> None:
        if not success:
            logger.error(
                "Channel %s failed for notification %s: %s",
                channel,
                self.notification.id,
                error or "unknown error",
            )
            self._result.record_failure()
        with self._lock:
            self._failed = self._failed or not success
            self._pending -= 1
            if self._pending:
                return
            status = DELIVERY_STATUS_FAILED if self._failed else DELIVERY_STATUS_SENT
        self._sink.record(self.notification.id, status)


class Dispatcher:
    """Write one in-app record per gated recipient, then hand channel sends to a pool."""

    def __init__(
        self,
        *,
        store: NotificationStore,
        gate: PreferenceGate,
        senders: Mapping[str, ChannelSender],
        pool: ChannelDeliveryPool,
        status_sink: DeliveryStatusSink,
        address_book: AddressBook,
        publisher: RealtimePublisher | None = None,
    ) -> None:
        self._store = store
        self._gate = gate
        self._senders = dict(senders)
        self._pool = pool
        self._status_sink = status_sink
        self._address_book = address_book
        self._publisher = publisher

    def dispatch(
        self,
        recipients: Iterable[Recipient],
        *,
        event_type: str,
        title: str,
        message: str,
        category: str,
        priority: str,
        channels: Sequence[str] = (CHANNEL_IN_APP,),
        action_url: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> DispatchResult:
        """Create records for ``recipients`` and schedule their channel sends.

        Store failures raised by the batched insert propagate. Channel failures
        are logged and counted on the returned result.
        """

        result = DispatchResult()
        unique = dedupe(recipients)
        self._gate.prefetch(unique)

        accepted: list[Recipient] = []
        for recipient in unique:
            if self._gate.should_send(recipient, event_type, CHANNEL_IN_APP):
                accepted.append(recipient)
            else:
                result.suppressed += 1
        if not accepted:
            logger.info(
                "Dispatch of %s created nothing (%s suppressed)", event_type, result.suppressed
            )
            return result

        plans = self._plan_channels(accepted, event_type, channels)
        created_at = now_in_app_timezone()
        drafts = [
            Notification(
                id=None,
                recipient_id=recipient.id,
                recipient_role=recipient.role,
                event_type=event_type,
                category=category,
                priority=priority,
                title=title,
                message=message,
                action_url=action_url,
                metadata=dict(metadata or {}),
                delivery_status=DELIVERY_STATUS_PENDING,
                channels=[CHANNEL_IN_APP, *(channel for channel, _ in plans[recipient.key])],
                created_at=created_at,
            )
            for recipient in accepted
        ]

        saved = self._store.insert_many(drafts)
        result.created = len(saved)
        result.notifications = saved

        in_app_only = [notification.id for notification in saved if not notification.external_channels]
        if in_app_only:
            try:
                self._store.update_delivery_status_many(in_app_only, DELIVERY_STATUS_SENT)
            except Exception:
                logger.exception("Could not mark %s in-app notifications as sent", len(in_app_only))

        for notification in saved:
            self._publish(notification)

        for recipient, notification in zip(accepted, saved):
            self._schedule(notification, plans[recipient.key], result)

        logger.info(
            "Dispatched %s: %s created, %s suppressed, %s channel sends queued",
            event_type,
            result.created,
            result.suppressed,
            len(result.deliveries),
        )
        return result

    def _plan_channels(
        self, recipients: Sequence[Recipient], event_type: str, channels: Sequence[str]
    ) -> dict[tuple[str | None, str], list[tuple[str, str]]]:
        """Return ``(channel, address)`` pairs to attempt for each recipient."""

        wanted = [
            channel
            for channel in dict.fromkeys(channels)
            if channel != CHANNEL_IN_APP and self._channel_available(channel)
        ]
        plans: dict[tuple[str | None, str], list[tuple[str, str]]] = {
            recipient.key: [] for recipient in recipients
        }
        if not wanted:
            return plans

        addressable = [recipient for recipient in recipients if not recipient.is_public]
        addresses = self._address_book.get_emails(addressable) if CHANNEL_EMAIL in wanted else {}
        for recipient in addressable:
            for channel in wanted:
                if not self._gate.should_send(recipient, event_type, channel):
                    continue
                address = addresses.get(recipient.key) if channel == CHANNEL_EMAIL else None
                if not address:
                    logger.warning(
                        "No %s address for %s %s; skipping channel",
                        channel,
                        recipient.role,
                        recipient.id,
                    )
                    continue
                plans[recipient.key].append((channel, address))
        return plans

    def _channel_available(self, channel: str) -> bool:
        sender = self._senders.get(channel)
        if sender is None or not sender.is_configured():
            logger.info("Channel %s is not configured; delivering in-app only", channel)
            return False
        return True

    def _schedule(
        self,
        notification: Notification,
        plan: list[tuple[str, str]],
        result: DispatchResult,
    ) -> None:
        if not plan:
            return
        tracker = _RecordDelivery(notification, len(plan), self._status_sink, result)
        for channel, address in plan:
            sender = self._senders[channel]

            def task(sender=sender, address=address) -> ChannelSendResult:
                return sender.send(notification, address)

            def on_complete(outcome, error, channel=channel) -> None:
                if error is not None:
                    tracker.finish(channel, False, str(error) or type(error).__name__)
                else:
                    tracker.finish(channel, outcome.success, outcome.error)

            future = self._pool.submit(task, on_complete)
            if future is None:
                tracker.finish(channel, False, "delivery queue is full")
                continue
            result.deliveries.append(future)

    def _publish(self, notification: Notification) -> None:
        if self._publisher is None:
            return
        try:
            self._publisher.dispatch(notification)
        except Exception:
            logger.warning(
                "Realtime push failed for notification %s", notification.id, exc_info=True
            )


__all__ = ["DispatchResult", "Dispatcher"]
