"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Iterable

import pytest

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)
os.environ["ADMIN_EMAILS"] = "admin@example.com"

from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.application.use_cases.notifications import build_pipeline  # noqa: E402
from app.config import reset_settings_cache  # noqa: E402
from app.domain.entities import CHANNEL_EMAIL, Notification  # noqa: E402
from app.infrastructure.database import build_engine, initialize_database  # noqa: E402
from app.infrastructure.models import (  # noqa: E402
    AuthUserModel,
    CustomerModel,
    DeliveryRequestModel,
    OrderModel,
    VolunteerModel,
    ZoneModel,
)
from app.infrastructure.notifications import ChannelDeliveryPool, ChannelSendResult  # noqa: E402

ADMIN_EMAIL = "admin@example.com"


class FakeEmailSender:
    """Records sends; addresses in ``failing`` fail and ``hanging`` block."""

    channel = CHANNEL_EMAIL

    def __init__(
        self,
        *,
        configured: bool = True,
        failing: Iterable[str] = (),
        raising: Iterable[str] = (),
        hanging: Iterable[str] = (),
        hang_seconds: float = 2.0,
    ) -> None:
        self.configured = configured
        self.failing = set(failing)
        self.raising = set(raising)
        self.hanging = set(hanging)
        self.hang_seconds = hang_seconds
        self.sent: list[tuple[int | None, str]] = []
        self._lock = threading.Lock()

    def is_configured(self) -> bool:
        return self.configured

    def send(self, notification: Notification, address: str) -> ChannelSendResult:
        if address in self.hanging:
            time.sleep(self.hang_seconds)
        if address in self.raising:
            raise RuntimeError("provider exploded")
        with self._lock:
            self.sent.append((notification.id, address))
        if address in self.failing:
            return ChannelSendResult(success=False, error="mailbox unavailable")
        return ChannelSendResult(success=True)


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'notifications.db'}")
    initialize_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def pool():
    delivery_pool = ChannelDeliveryPool(max_workers=2, max_pending=32, timeout=0.5)
    yield delivery_pool
    delivery_pool.shutdown(wait=True)


@pytest.fixture()
def email_sender():
    return FakeEmailSender()


@pytest.fixture()
def pipeline_factory(session, pool):
    def factory(sender=None):
        return build_pipeline(
            session,
            senders={CHANNEL_EMAIL: sender or FakeEmailSender()},
            pool=pool,
            publisher=None,
            admin_emails=frozenset({ADMIN_EMAIL}),
        )

    return factory


@pytest.fixture()
def seed(session):
    """Return helpers that insert profile and context rows."""

    class Seeder:
        def volunteer(self, volunteer_id, *, auth_id=None, name=None, email=None, preferences=None):
            session.add(
                VolunteerModel(
                    id=volunteer_id,
                    auth_id=auth_id,
                    name=name or f"Volunteer {volunteer_id}",
                    email=email,
                    notification_preferences=preferences,
                )
            )
            session.commit()

        def customer(self, customer_id, *, email=None, preferences=None):
            session.add(
                CustomerModel(
                    id=customer_id,
                    name=f"Customer {customer_id}",
                    email=email,
                    notification_preferences=preferences,
                )
            )
            session.commit()

        def auth_user(self, user_id, email):
            session.add(AuthUserModel(id=user_id, email=email))
            session.commit()

        def order(self, order_id, **values):
            values.setdefault("customer_name", "Amina")
            values.setdefault("order_status", "pending")
            session.add(OrderModel(id=order_id, **values))
            session.commit()

        def zone(self, zone_id, name):
            session.add(ZoneModel(id=zone_id, name=name))
            session.commit()

        def delivery_request(self, request_id, volunteer_id, *, order_id=None, status="pending"):
            session.add(
                DeliveryRequestModel(
                    id=request_id, volunteer_id=volunteer_id, order_id=order_id, status=status
                )
            )
            session.commit()

    return Seeder()
