"""Dispatcher tests against in-memory stores and fake channel senders."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import replace

import pytest

from app.application.use_cases.notifications import Dispatcher, PreferenceGate
from app.domain.entities import (
    PUBLIC_RECIPIENT,
    AdminRecipient,
    CustomerRecipient,
    RecipientPreferences,
    VolunteerRecipient,
)
from app.infrastructure.notifications import ChannelDeliveryPool

from .conftest import FakeEmailSender


class StoreFailure(Exception):
    pass


class MemoryStore:
    def __init__(self, *, fail=False):
        self.fail = fail
        self.rows = {}
        self.insert_calls = 0
        self._ids = itertools.count(1)

    def insert_many(self, notifications):
        self.insert_calls += 1
        if self.fail:
            raise StoreFailure("insert failed")
        saved = [replace(notification, id=next(self._ids)) for notification in notifications]
        for notification in saved:
            self.rows[notification.id] = notification
        return saved

    def update_delivery_status_many(self, notification_ids, status):
        for notification_id in notification_ids:
            self.rows[notification_id] = replace(
                self.rows[notification_id], delivery_status=status
            )


class MemorySink:
    def __init__(self, store):
        self.store = store
        self.records = []
        self._lock = threading.Lock()

    def record(self, notification_id, status):
        with self._lock:
            self.records.append((notification_id, status))
            self.store.update_delivery_status_many([notification_id], status)


class MemoryProfiles:
    def __init__(self, preferences=None, emails=None):
        self.preferences = preferences or {}
        self.emails = emails or {}

    def get_preferences(self, identity, role):
        return self.preferences.get((identity, role))

    def get_preferences_many(self, recipients):
        return {r.key: self.preferences.get(r.key) for r in recipients}

    def get_emails(self, recipients):
        return {r.key: self.emails[r.key] for r in recipients if r.key in self.emails}


EMAILS = {
    ("c1", "customer"): "c1@example.com",
    ("c2", "customer"): "c2@example.com",
    ("v1", "volunteer"): "v1@example.com",
    ("a1", "admin"): "a1@example.com",
}


def _dispatcher(*, sender, pool, store, preferences=None, publisher=None):
    profiles = MemoryProfiles(preferences=preferences, emails=EMAILS)
    return Dispatcher(
        store=store,
        gate=PreferenceGate(profiles),
        senders={"email": sender},
        pool=pool,
        status_sink=MemorySink(store),
        address_book=profiles,
        publisher=publisher,
    )


def _dispatch(dispatcher, recipients, **overrides):
    values = {
        "event_type": "order_update",
        "title": "Order confirmed",
        "message": "Your order has been confirmed!",
        "category": "order",
        "priority": "high",
        "channels": ("in_app", "email"),
        "metadata": {"order_id": "O1"},
    }
    values.update(overrides)
    return dispatcher.dispatch(recipients, **values)


def test_creates_one_pending_record_per_recipient_in_one_insert(pool):
    store = MemoryStore()
    sender = FakeEmailSender()
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store)
    recipients = [CustomerRecipient("c1"), CustomerRecipient("c2"), VolunteerRecipient("v1")]

    result = _dispatch(dispatcher, recipients)

    assert result.created == 3
    assert store.insert_calls == 1
    assert all(n.delivery_status == "pending" for n in result.notifications)
    assert [n.recipient_id for n in result.notifications] == ["c1", "c2", "v1"]
    assert all(n.channels == ["in_app", "email"] for n in result.notifications)
    assert result.wait(timeout=5)
    assert result.failed == 0
    assert {row.delivery_status for row in store.rows.values()} == {"sent"}
    assert sorted(address for _, address in sender.sent) == [
        "c1@example.com",
        "c2@example.com",
        "v1@example.com",
    ]


def test_duplicate_recipients_produce_one_record(pool):
    store = MemoryStore()
    dispatcher = _dispatcher(sender=FakeEmailSender(), pool=pool, store=store)

    result = _dispatch(
        dispatcher,
        [CustomerRecipient("c1"), CustomerRecipient("c1")],
        channels=("in_app",),
    )

    assert result.created == 1


def test_failed_email_only_marks_its_own_record(pool, caplog):
    store = MemoryStore()
    sender = FakeEmailSender(failing={"c2@example.com"})
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

    with caplog.at_level(logging.ERROR):
        result = _dispatch(dispatcher, [CustomerRecipient("c1"), CustomerRecipient("c2")])
        assert result.wait(timeout=5)

    statuses = {row.recipient_id: row.delivery_status for row in store.rows.values()}
    assert statuses == {"c1": "sent", "c2": "failed"}
    assert result.created == 2
    assert result.failed == 1
    assert "mailbox unavailable" in caplog.text


def test_sender_exception_does_not_escape_dispatch(pool):
    store = MemoryStore()
    sender = FakeEmailSender(raising={"c1@example.com"})
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

    result = _dispatch(dispatcher, [CustomerRecipient("c1"), CustomerRecipient("c2")])

    assert result.wait(timeout=5)
    statuses = {row.recipient_id: row.delivery_status for row in store.rows.values()}
    assert statuses == {"c1": "failed", "c2": "sent"}
    assert result.failed == 1


def test_timed_out_send_is_recorded_as_failed():
    pool = ChannelDeliveryPool(max_workers=2, max_pending=8, timeout=0.2)
    try:
        store = MemoryStore()
        sender = FakeEmailSender(hanging={"c1@example.com"}, hang_seconds=1.0)
        dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

        result = _dispatch(dispatcher, [CustomerRecipient("c1")])

        assert result.wait(timeout=5)
        assert store.rows[result.notifications[0].id].delivery_status == "failed"
        assert result.failed == 1
    finally:
        pool.shutdown(wait=True)


def test_unconfigured_email_degrades_to_in_app_only(pool):
    store = MemoryStore()
    sender = FakeEmailSender(configured=False)
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

    result = _dispatch(dispatcher, [CustomerRecipient("c1")])

    assert result.created == 1
    assert result.deliveries == []
    assert result.failed == 0
    assert result.notifications[0].channels == ["in_app"]
    assert store.rows[result.notifications[0].id].delivery_status == "sent"
    assert sender.sent == []


def test_recipient_without_address_gets_in_app_only(pool):
    store = MemoryStore()
    sender = FakeEmailSender()
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

    result = _dispatch(dispatcher, [CustomerRecipient("c1"), CustomerRecipient("c9")])
    result.wait(timeout=5)

    channels = {n.recipient_id: n.channels for n in result.notifications}
    assert channels == {"c1": ["in_app", "email"], "c9": ["in_app"]}
    assert sender.sent == [(result.notifications[0].id, "c1@example.com")]


def test_store_failure_propagates_and_sends_nothing(pool):
    store = MemoryStore(fail=True)
    sender = FakeEmailSender()
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

    with pytest.raises(StoreFailure):
        _dispatch(dispatcher, [CustomerRecipient("c1")])
    assert sender.sent == []


def test_suppressed_recipients_are_counted_not_failed(pool):
    store = MemoryStore()
    preferences = {("c2", "customer"): RecipientPreferences(push_notifications=False)}
    dispatcher = _dispatcher(
        sender=FakeEmailSender(), pool=pool, store=store, preferences=preferences
    )

    result = _dispatch(dispatcher, [CustomerRecipient("c1"), CustomerRecipient("c2")])
    result.wait(timeout=5)

    assert result.created == 1
    assert result.suppressed == 1
    assert result.failed == 0


def test_email_opt_out_keeps_in_app_record(pool):
    store = MemoryStore()
    sender = FakeEmailSender()
    preferences = {("c1", "customer"): RecipientPreferences(email_notifications=False)}
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store, preferences=preferences)

    result = _dispatch(dispatcher, [CustomerRecipient("c1")])

    assert result.notifications[0].channels == ["in_app"]
    assert sender.sent == []


def test_public_and_admin_recipients_bypass_preferences(pool):
    store = MemoryStore()
    sender = FakeEmailSender()
    dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

    result = _dispatch(dispatcher, [AdminRecipient("a1"), PUBLIC_RECIPIENT])
    result.wait(timeout=5)

    public = next(n for n in result.notifications if n.is_public)
    assert public.recipient_id is None
    assert public.channels == ["in_app"]
    assert sender.sent == [(result.notifications[0].id, "a1@example.com")]


def test_saturated_pool_counts_dropped_sends_as_failed():
    pool = ChannelDeliveryPool(max_workers=1, max_pending=1, timeout=2.0)
    try:
        store = MemoryStore()
        sender = FakeEmailSender(hanging={"c1@example.com"}, hang_seconds=0.3)
        dispatcher = _dispatcher(sender=sender, pool=pool, store=store)

        result = _dispatch(dispatcher, [CustomerRecipient("c1"), CustomerRecipient("c2")])

        assert result.wait(timeout=5)
        assert len(result.deliveries) == 1
        assert result.failed == 1
        statuses = {row.recipient_id: row.delivery_status for row in store.rows.values()}
        assert statuses == {"c1": "sent", "c2": "failed"}
    finally:
        pool.shutdown(wait=True)


def test_realtime_push_failure_is_not_fatal(pool, caplog):
    class BrokenPublisher:
        def dispatch(self, notification):
            raise RuntimeError("socket closed")

    store = MemoryStore()
    dispatcher = _dispatcher(
        sender=FakeEmailSender(), pool=pool, store=store, publisher=BrokenPublisher()
    )

    with caplog.at_level(logging.WARNING):
        result = _dispatch(dispatcher, [CustomerRecipient("c1")], channels=("in_app",))

    assert result.created == 1
    assert "Realtime push failed" in caplog.text
