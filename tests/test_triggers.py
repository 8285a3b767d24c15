"""End-to-end trigger scenarios against a SQLite database."""

from __future__ import annotations

import pytest

from app.application.use_cases.notifications import (
    NotificationNotFoundError,
    count_unread_notifications,
    create_system_announcement,
    list_notifications,
    mark_all_notifications_read,
    milestone_copy,
    notify_admins,
    notify_challenge_milestone,
    notify_delivery_assigned,
    notify_delivery_completed,
    notify_delivery_request_update,
    notify_order_created,
    notify_order_status_change,
    notify_payment_failed,
    notify_payment_verified,
    notify_zone_assigned,
)
from app.domain.entities import TargetingError
from app.infrastructure.models import NotificationModel
from app.infrastructure.repositories import NotificationRepository

from .conftest import ADMIN_EMAIL, FakeEmailSender


def _rows(session):
    session.expire_all()
    return session.query(NotificationModel).order_by(NotificationModel.id).all()


def test_order_confirmation_notifies_customer_and_referrer(session, seed, pipeline_factory):
    seed.customer("C1", email="c1@example.com")
    seed.volunteer("V1", auth_id="auth-V1", email="v1@example.com")
    seed.order("O1", customer_id="C1", referred_by="V1")
    sender = FakeEmailSender()

    result = notify_order_status_change(
        session, order_id="O1", new_status="confirmed", pipeline=pipeline_factory(sender)
    )

    assert result.created == 2
    assert result.wait(timeout=5)
    customer, volunteer = result.notifications
    assert (customer.recipient_id, customer.recipient_role) == ("C1", "customer")
    assert customer.category == "order"
    assert customer.priority == "high"
    assert customer.channels == ["in_app", "email"]
    assert "confirmed" in customer.title
    assert (volunteer.recipient_id, volunteer.recipient_role) == ("V1", "volunteer")
    assert volunteer.category == "order"
    assert volunteer.priority == "medium"
    assert volunteer.channels == ["in_app"]
    assert volunteer.metadata["order_id"] == "O1"
    assert sender.sent == [(customer.id, "c1@example.com")]

    statuses = {row.recipient_id: row.delivery_status for row in _rows(session)}
    assert statuses == {"C1": "sent", "V1": "sent"}


def test_status_change_stamps_event_key(session, seed, pipeline_factory):
    seed.customer("C1")
    seed.order("O1", customer_id="C1")

    result = notify_order_status_change(
        session, order_id="O1", new_status="processing", pipeline=pipeline_factory()
    )

    notification = result.notifications[0]
    assert notification.metadata["event_key"] == "order_update:O1:processing"
    assert notification.priority == "medium"
    assert notification.title == "Order Status Update"


def test_cancellation_is_delivered_despite_opt_out(session, seed, pipeline_factory):
    seed.customer("C1", preferences={"push_notifications": False, "order_updates": False})
    seed.order("O1", customer_id="C1")

    result = notify_order_status_change(
        session, order_id="O1", new_status="cancelled", pipeline=pipeline_factory()
    )

    assert result.created == 1
    assert result.notifications[0].event_type == "order_cancelled"


def test_announcement_to_everyone_counts_linked_volunteers_customers_and_public(
    session, seed, pipeline_factory
):
    seed.volunteer("V1", auth_id="auth-1")
    seed.volunteer("V2", auth_id="auth-2")
    seed.volunteer("V3")
    seed.customer("C1")
    seed.customer("C2")

    result = create_system_announcement(
        session,
        title="Maintenance",
        message="Site down 10pm-11pm",
        target_type="all",
        pipeline=pipeline_factory(),
    )

    assert result.created == 5
    rows = _rows(session)
    assert len(rows) == 5
    public = [row for row in rows if row.recipient_role == "public"]
    assert len(public) == 1
    assert public[0].recipient_id is None
    assert {row.recipient_id for row in rows if row.recipient_role == "volunteer"} == {"V1", "V2"}
    assert all(row.priority == "medium" for row in rows)


def test_announcement_priority_override_and_role_scope(session, seed, pipeline_factory):
    seed.customer("C1")
    seed.volunteer("V1", auth_id="auth-1")

    result = create_system_announcement(
        session,
        title="Price update",
        message="New prices from Monday",
        target_type="role",
        target_role="customer",
        priority="high",
        pipeline=pipeline_factory(),
    )

    assert [n.recipient_id for n in result.notifications] == ["C1"]
    assert result.notifications[0].priority == "high"
    assert result.notifications[0].metadata["priority"] == "high"


def test_malformed_announcement_target_creates_nothing(session, seed, pipeline_factory):
    seed.customer("C1")

    with pytest.raises(TargetingError):
        create_system_announcement(
            session,
            title="Hello",
            message="World",
            target_type="role",
            pipeline=pipeline_factory(),
        )
    assert _rows(session) == []


def test_push_opt_out_blocks_non_critical_but_not_payment_failure(
    session, seed, pipeline_factory
):
    seed.customer("C2", preferences={"push_notifications": False})
    seed.order("O2", customer_id="C2")
    pipeline = pipeline_factory()

    update = notify_order_status_change(
        session, order_id="O2", new_status="out_for_delivery", pipeline=pipeline
    )
    failure = notify_payment_failed(session, order_id="O2", pipeline=pipeline)

    assert update.created == 0
    assert update.suppressed == 1
    assert failure.created == 1
    assert failure.notifications[0].priority == "critical"
    assert len(_rows(session)) == 1


def test_payment_failure_alerts_allow_listed_admins(session, seed, pipeline_factory):
    seed.customer("C1")
    seed.auth_user("A1", ADMIN_EMAIL)
    seed.auth_user("U2", "someone@example.com")
    seed.order("O1", customer_id="C1")

    result = notify_payment_failed(session, order_id="O1", pipeline=pipeline_factory())

    roles = [(n.recipient_id, n.recipient_role, n.priority) for n in result.notifications]
    assert roles == [("C1", "customer", "critical"), ("A1", "admin", "critical")]


def test_missing_order_aborts_without_side_effects(session, pipeline_factory):
    with pytest.raises(NotificationNotFoundError):
        notify_order_created(session, order_id="nope", pipeline=pipeline_factory())
    assert _rows(session) == []


def test_order_created_goes_to_admins_only(session, seed, pipeline_factory):
    seed.customer("C1")
    seed.auth_user("A1", ADMIN_EMAIL)
    seed.order("O1", customer_id="C1", quantity=2, total_price=40.0)

    result = notify_order_created(session, order_id="O1", pipeline=pipeline_factory())

    assert [(n.recipient_id, n.category) for n in result.notifications] == [("A1", "admin")]
    assert "#O1" in result.notifications[0].message


def test_payment_verified_reaches_customer_and_referrer(session, seed, pipeline_factory):
    seed.customer("C1")
    seed.volunteer("V1", auth_id="auth-1")
    seed.order("O1", customer_id="C1", referred_by="V1")

    result = notify_payment_verified(session, order_id="O1", pipeline=pipeline_factory())

    assert [n.recipient_id for n in result.notifications] == ["C1", "V1"]
    assert {n.event_type for n in result.notifications} == {"payment_verified"}


def test_delivery_assignment_and_completion(session, seed, pipeline_factory):
    seed.customer("C1", email="c1@example.com")
    seed.volunteer("V1", auth_id="auth-1", name="Sara", email="v1@example.com")
    seed.order("O1", customer_id="C1")
    pipeline = pipeline_factory()

    assigned = notify_delivery_assigned(session, order_id="O1", volunteer_id="V1", pipeline=pipeline)
    completed = notify_delivery_completed(
        session, order_id="O1", volunteer_id="V1", pipeline=pipeline
    )

    assert [(n.recipient_id, n.priority) for n in assigned.notifications] == [
        ("V1", "high"),
        ("C1", "high"),
    ]
    assert "Sara" in assigned.notifications[1].message
    assert [(n.recipient_id, n.priority) for n in completed.notifications] == [
        ("C1", "high"),
        ("V1", "medium"),
    ]
    assert assigned.wait(timeout=5) and completed.wait(timeout=5)


def test_delivery_assignment_to_unknown_volunteer(session, seed, pipeline_factory):
    seed.order("O1")

    with pytest.raises(NotificationNotFoundError):
        notify_delivery_assigned(session, order_id="O1", volunteer_id="V9", pipeline=pipeline_factory())


@pytest.mark.parametrize(
    ("milestone", "title"),
    [
        (5, "First Milestone Reached!"),
        (10, "Halfway There!"),
        (15, "Almost There!"),
        (20, "Congratulations! Goal Achieved!"),
        (7, "Milestone: 7 Bottles"),
    ],
)
def test_milestone_copy(milestone, title):
    assert milestone_copy(milestone, "Sara")[0] == title


def test_challenge_milestone_uses_stored_name(session, seed, pipeline_factory):
    seed.volunteer("V1", auth_id="auth-1", name="Sara")

    result = notify_challenge_milestone(
        session, volunteer_id="V1", milestone=10, pipeline=pipeline_factory()
    )

    notification = result.notifications[0]
    assert notification.category == "achievement"
    assert "Sara" in notification.message
    assert notification.metadata["milestone"] == 10


def test_milestone_respects_category_opt_out(session, seed, pipeline_factory):
    seed.volunteer("V1", auth_id="auth-1", preferences={"challenge_milestones": False})

    result = notify_challenge_milestone(
        session, volunteer_id="V1", milestone=5, pipeline=pipeline_factory()
    )

    assert result.created == 0
    assert result.suppressed == 1


def test_unlinked_volunteer_is_skipped_silently(session, seed, pipeline_factory):
    seed.volunteer("V3")

    result = notify_challenge_milestone(
        session, volunteer_id="V3", milestone=5, pipeline=pipeline_factory()
    )

    assert result.created == 0
    assert _rows(session) == []


def test_zone_assignment(session, seed, pipeline_factory):
    seed.volunteer("V1", auth_id="auth-1")
    seed.zone("Z1", "North Side")

    result = notify_zone_assigned(
        session, volunteer_id="V1", zone_id="Z1", pipeline=pipeline_factory()
    )

    assert "North Side" in result.notifications[0].message
    assert result.notifications[0].category == "zone"

    with pytest.raises(NotificationNotFoundError):
        notify_zone_assigned(session, volunteer_id="V1", zone_id="Z9", pipeline=pipeline_factory())


@pytest.mark.parametrize(
    ("status", "title"),
    [
        ("approved", "Delivery Request Approved"),
        ("rejected", "Delivery Request Declined"),
        ("expired", "Delivery Request Update"),
    ],
)
def test_delivery_request_update(session, seed, pipeline_factory, status, title):
    seed.volunteer("V1", auth_id="auth-1")
    seed.delivery_request("R1", "V1", order_id="O1")

    result = notify_delivery_request_update(
        session, request_id="R1", status=status, pipeline=pipeline_factory()
    )

    assert result.notifications[0].title == title
    assert result.notifications[0].metadata["request_id"] == "R1"


def test_notify_admins_reaches_only_allow_listed_accounts(session, seed, pipeline_factory):
    seed.auth_user("A1", ADMIN_EMAIL)
    seed.auth_user("U2", "someone@example.com")

    result = notify_admins(
        session,
        title="Stock low",
        message="Only 3 bottles left",
        metadata={"stock": 3},
        pipeline=pipeline_factory(),
    )

    assert [n.recipient_id for n in result.notifications] == ["A1"]
    assert result.notifications[0].metadata == {"stock": 3}


def test_inbox_lists_own_and_public_records(session, seed, pipeline_factory):
    seed.customer("C1")
    seed.customer("C2")
    seed.order("O1", customer_id="C1")
    pipeline = pipeline_factory()
    notify_order_status_change(session, order_id="O1", new_status="processing", pipeline=pipeline)
    create_system_announcement(
        session, title="Hello", message="Everyone", target_type="all", pipeline=pipeline
    )

    items, total = NotificationRepository(session).list_for_recipient("C1", "customer")

    assert total == 3
    assert {(n.recipient_id, n.event_type) for n in items} == {
        ("C1", "order_update"),
        ("C1", "system_announcement"),
        (None, "system_announcement"),
    }


def test_customer_record_stays_out_of_volunteer_inbox_with_same_id(
    session, seed, pipeline_factory
):
    seed.customer("X1")
    seed.volunteer("X1", auth_id="auth-X1")
    seed.order("O9", customer_id="X1")
    notify_order_status_change(
        session, order_id="O9", new_status="confirmed", pipeline=pipeline_factory()
    )

    items, total = list_notifications(session, recipient_id="X1", role="volunteer")
    assert (items, total) == ([], 0)
    assert count_unread_notifications(session, recipient_id="X1", role="volunteer") == 0
    assert mark_all_notifications_read(session, recipient_id="X1", role="volunteer") == 0

    items, _ = list_notifications(session, recipient_id="X1", role="customer")
    assert [(n.recipient_role, n.title, n.is_read) for n in items] == [
        ("customer", "Order confirmed", False)
    ]
