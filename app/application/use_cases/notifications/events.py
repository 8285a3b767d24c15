"""Event triggers that turn business events into notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    EVENT_ADMIN_ACTION,
    EVENT_CHALLENGE_MILESTONE,
    EVENT_DELIVERY_REQUEST_UPDATE,
    EVENT_DELIVERY_UPDATE,
    EVENT_ORDER_CANCELLED,
    EVENT_ORDER_CREATED,
    EVENT_ORDER_UPDATE,
    EVENT_PAYMENT_FAILED,
    EVENT_PAYMENT_VERIFIED,
    EVENT_REFERRAL_UPDATE,
    EVENT_ZONE_ASSIGNED,
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_DELIVERED,
    Order,
    Recipient,
    Volunteer,
    build_event_key,
)
from app.infrastructure.repositories import (
    DeliveryRequestRepository,
    OrderRepository,
    ProfileRepository,
    ZoneRepository,
)

from .classifier import DELIVERY_STATUS_ASSIGNED, classify
from .dispatcher import DispatchResult
from .errors import NotificationNotFoundError
from .pipeline import NotificationPipeline, build_pipeline

logger = logging.getLogger(__name__)

DELIVERY_STATUS_COMPLETED = "completed"
REQUEST_STATUS_APPROVED = "approved"
REQUEST_STATUS_REJECTED = "rejected"

VOLUNTEER_DASHBOARD_URL = "/volunteer/dashboard"
VOLUNTEER_DELIVERIES_URL = "/volunteer/deliveries"

_MILESTONE_COPY = {
    5: ("First Milestone Reached!", "Great progress, {name}! You've reached 5 bottles!"),
    10: (
        "Halfway There!",
        "Amazing work, {name}! You're at 10 bottles - halfway to your goal!",
    ),
    15: (
        "Almost There!",
        "Excellent progress, {name}! Just 5 more bottles to reach your goal of 20!",
    ),
    20: (
        "Congratulations! Goal Achieved!",
        "Fantastic work, {name}! You've successfully reached your goal of 20 bottles!",
    ),
}


def _order_url(order: Order) -> str:
    return f"/order/{order.id}"


def _resolve_pipeline(
    session: Session, pipeline: NotificationPipeline | None
) -> NotificationPipeline:
    return pipeline if pipeline is not None else build_pipeline(session)


def _load_order(session: Session, order_id: str) -> Order:
    order = OrderRepository(session).get(order_id)
    if order is None:
        raise NotificationNotFoundError(f"Order {order_id} not found")
    return order


def _load_volunteer(session: Session, volunteer_id: str) -> Volunteer:
    volunteer = ProfileRepository(session).get_volunteer(volunteer_id)
    if volunteer is None:
        raise NotificationNotFoundError(f"Volunteer {volunteer_id} not found")
    return volunteer


def _send(
    pipeline: NotificationPipeline,
    recipients: Iterable[Recipient | None],
    *,
    event_type: str,
    entity_id: object,
    title: str,
    message: str,
    status: str | None = None,
    action_url: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> DispatchResult:
    targets = [recipient for recipient in recipients if recipient is not None]
    if not targets:
        logger.info("No reachable recipients for %s on %s", event_type, entity_id)
        return DispatchResult()

    policy = classify(event_type, status)
    payload = dict(metadata or {})
    payload["event_key"] = build_event_key(event_type, entity_id, status)
    return pipeline.dispatcher.dispatch(
        targets,
        event_type=event_type,
        title=title,
        message=message,
        category=policy.category,
        priority=policy.priority,
        channels=policy.channels,
        action_url=action_url,
        metadata=payload,
    )


def notify_order_created(
    session: Session, *, order_id: str, pipeline: NotificationPipeline | None = None
) -> DispatchResult:
    """Tell every administrator that a new order arrived."""

    order = _load_order(session, order_id)
    pipeline = _resolve_pipeline(session, pipeline)
    return _send(
        pipeline,
        pipeline.resolver.admins(),
        event_type=EVENT_ORDER_CREATED,
        entity_id=order.id,
        title="New Order Received",
        message=(
            f"New order #{order.short_id} from {order.customer_name} "
            f"({order.quantity} item(s), total {order.total_price:.2f})"
        ),
        action_url=f"/admin/orders/{order.id}",
        metadata={"order_id": order.id, "customer_name": order.customer_name},
    )


def notify_order_status_change(
    session: Session,
    *,
    order_id: str,
    new_status: str,
    customer_id: str | None = None,
    volunteer_id: str | None = None,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    """Notify the customer of a status change and the referrer of a confirmation."""

    order = _load_order(session, order_id)
    pipeline = _resolve_pipeline(session, pipeline)

    if new_status == ORDER_STATUS_CONFIRMED:
        title = "Order confirmed"
        message = f"Your order #{order.short_id} has been confirmed!"
    elif new_status == ORDER_STATUS_DELIVERED:
        title = "Order delivered"
        message = f"Your order #{order.short_id} has been delivered!"
    elif new_status == ORDER_STATUS_CANCELLED:
        title = "Order cancelled"
        message = f"Your order #{order.short_id} has been cancelled."
    else:
        title = "Order Status Update"
        message = f"Your order #{order.short_id} status updated to: {new_status}"
    event_type = EVENT_ORDER_CANCELLED if new_status == ORDER_STATUS_CANCELLED else EVENT_ORDER_UPDATE

    result = _send(
        pipeline,
        [pipeline.resolver.customer(customer_id or order.customer_id)],
        event_type=event_type,
        entity_id=order.id,
        status=new_status,
        title=title,
        message=message,
        action_url=_order_url(order),
        metadata={"order_id": order.id, "new_status": new_status},
    )

    referrer_id = volunteer_id or order.referred_by
    if new_status == ORDER_STATUS_CONFIRMED and referrer_id:
        result.merge(
            _send(
                pipeline,
                [pipeline.resolver.volunteer(referrer_id)],
                event_type=EVENT_REFERRAL_UPDATE,
                entity_id=order.id,
                status=new_status,
                title="Referred Order Confirmed!",
                message=f"An order you referred (#{order.short_id}) has been confirmed!",
                action_url=VOLUNTEER_DASHBOARD_URL,
                metadata={"order_id": order.id, "customer_name": order.customer_name},
            )
        )
    return result


def notify_payment_failed(
    session: Session, *, order_id: str, pipeline: NotificationPipeline | None = None
) -> DispatchResult:
    """Alert the customer and the administrators about a failed payment."""

    order = _load_order(session, order_id)
    pipeline = _resolve_pipeline(session, pipeline)

    result = _send(
        pipeline,
        [pipeline.resolver.customer(order.customer_id)],
        event_type=EVENT_PAYMENT_FAILED,
        entity_id=order.id,
        title="Payment Failed",
        message=(
            f"We could not verify the payment for order #{order.short_id}. "
            "Please review your payment details."
        ),
        action_url=_order_url(order),
        metadata={"order_id": order.id},
    )
    result.merge(
        _send(
            pipeline,
            pipeline.resolver.admins(),
            event_type=EVENT_ADMIN_ACTION,
            entity_id=order.id,
            status=EVENT_PAYMENT_FAILED,
            title="Payment Failed",
            message=f"Payment failed for order #{order.short_id} ({order.customer_name})",
            action_url=f"/admin/orders/{order.id}",
            metadata={"order_id": order.id, "customer_name": order.customer_name},
        )
    )
    return result


def notify_payment_verified(
    session: Session, *, order_id: str, pipeline: NotificationPipeline | None = None
) -> DispatchResult:
    order = _load_order(session, order_id)
    pipeline = _resolve_pipeline(session, pipeline)

    result = _send(
        pipeline,
        [pipeline.resolver.customer(order.customer_id)],
        event_type=EVENT_PAYMENT_VERIFIED,
        entity_id=order.id,
        title="Payment Verified",
        message=f"Your payment for order #{order.short_id} has been verified!",
        action_url=_order_url(order),
        metadata={"order_id": order.id},
    )
    result.merge(
        _send(
            pipeline,
            [pipeline.resolver.volunteer(order.referred_by)],
            event_type=EVENT_PAYMENT_VERIFIED,
            entity_id=order.id,
            title="Payment Verified",
            message=f"Payment verified for order #{order.short_id} ({order.customer_name})",
            action_url=VOLUNTEER_DASHBOARD_URL,
            metadata={"order_id": order.id},
        )
    )
    return result


def notify_delivery_assigned(
    session: Session,
    *,
    order_id: str,
    volunteer_id: str,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    """Inform the assigned volunteer and the customer about a new delivery."""

    order = _load_order(session, order_id)
    volunteer = _load_volunteer(session, volunteer_id)
    pipeline = _resolve_pipeline(session, pipeline)
    metadata = {"order_id": order.id, "volunteer_id": volunteer.id}

    result = _send(
        pipeline,
        [pipeline.resolver.volunteer(volunteer.id)],
        event_type=EVENT_DELIVERY_UPDATE,
        entity_id=order.id,
        status=DELIVERY_STATUS_ASSIGNED,
        title="New Delivery Assigned",
        message=(
            f"You have been assigned to deliver order #{order.short_id} "
            f"for {order.customer_name}."
        ),
        action_url=VOLUNTEER_DELIVERIES_URL,
        metadata=metadata,
    )
    result.merge(
        _send(
            pipeline,
            [pipeline.resolver.customer(order.customer_id)],
            event_type=EVENT_DELIVERY_UPDATE,
            entity_id=order.id,
            status=DELIVERY_STATUS_ASSIGNED,
            title="Delivery Scheduled",
            message=(
                f"{volunteer.name} has been assigned to deliver your order #{order.short_id}."
            ),
            action_url=_order_url(order),
            metadata=metadata,
        )
    )
    return result


def notify_delivery_completed(
    session: Session,
    *,
    order_id: str,
    volunteer_id: str,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    order = _load_order(session, order_id)
    volunteer = _load_volunteer(session, volunteer_id)
    pipeline = _resolve_pipeline(session, pipeline)

    result = _send(
        pipeline,
        [pipeline.resolver.customer(order.customer_id)],
        event_type=EVENT_ORDER_UPDATE,
        entity_id=order.id,
        status=ORDER_STATUS_DELIVERED,
        title="Order delivered",
        message=f"Your order #{order.short_id} has been delivered!",
        action_url=_order_url(order),
        metadata={"order_id": order.id, "new_status": ORDER_STATUS_DELIVERED},
    )
    result.merge(
        _send(
            pipeline,
            [pipeline.resolver.volunteer(volunteer.id)],
            event_type=EVENT_DELIVERY_UPDATE,
            entity_id=order.id,
            status=DELIVERY_STATUS_COMPLETED,
            title="Delivery Completed",
            message=f"Thank you! Order #{order.short_id} has been marked as delivered.",
            action_url=VOLUNTEER_DELIVERIES_URL,
            metadata={"order_id": order.id, "volunteer_id": volunteer.id},
        )
    )
    return result


def milestone_copy(milestone: int, volunteer_name: str) -> tuple[str, str]:
    """Return the ``(title, message)`` shown when a volunteer reaches ``milestone``."""

    if milestone in _MILESTONE_COPY:
        title, template = _MILESTONE_COPY[milestone]
        return title, template.format(name=volunteer_name)
    return f"Milestone: {milestone} Bottles", f"You've reached {milestone} bottles!"


def notify_challenge_milestone(
    session: Session,
    *,
    volunteer_id: str,
    milestone: int,
    volunteer_name: str | None = None,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    volunteer = _load_volunteer(session, volunteer_id)
    pipeline = _resolve_pipeline(session, pipeline)
    title, message = milestone_copy(milestone, volunteer_name or volunteer.name)
    return _send(
        pipeline,
        [pipeline.resolver.volunteer(volunteer.id)],
        event_type=EVENT_CHALLENGE_MILESTONE,
        entity_id=volunteer.id,
        status=str(milestone),
        title=title,
        message=message,
        action_url=VOLUNTEER_DASHBOARD_URL,
        metadata={"milestone": milestone, "total_bottles": milestone},
    )


def notify_zone_assigned(
    session: Session,
    *,
    volunteer_id: str,
    zone_id: str,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    volunteer = _load_volunteer(session, volunteer_id)
    zone = ZoneRepository(session).get(zone_id)
    if zone is None:
        raise NotificationNotFoundError(f"Zone {zone_id} not found")
    pipeline = _resolve_pipeline(session, pipeline)
    return _send(
        pipeline,
        [pipeline.resolver.volunteer(volunteer.id)],
        event_type=EVENT_ZONE_ASSIGNED,
        entity_id=volunteer.id,
        status=zone.id,
        title="Delivery Zone Assigned",
        message=f"You have been assigned to the {zone.name} delivery zone.",
        action_url=VOLUNTEER_DASHBOARD_URL,
        metadata={"zone_id": zone.id, "zone_name": zone.name},
    )


def notify_delivery_request_update(
    session: Session,
    *,
    request_id: str,
    status: str,
    volunteer_id: str | None = None,
    pipeline: NotificationPipeline | None = None,
) -> DispatchResult:
    """Tell a volunteer whether their delivery request was approved or declined."""

    request = DeliveryRequestRepository(session).get(request_id)
    if request is None:
        raise NotificationNotFoundError(f"Delivery request {request_id} not found")
    volunteer = _load_volunteer(session, volunteer_id or request.volunteer_id)
    pipeline = _resolve_pipeline(session, pipeline)

    if status == REQUEST_STATUS_APPROVED:
        title = "Delivery Request Approved"
        message = "Your delivery request has been approved. The order is now assigned to you."
    elif status == REQUEST_STATUS_REJECTED:
        title = "Delivery Request Declined"
        message = "Your delivery request was not approved this time."
    else:
        title = "Delivery Request Update"
        message = f"Your delivery request status changed to: {status}"

    return _send(
        pipeline,
        [pipeline.resolver.volunteer(volunteer.id)],
        event_type=EVENT_DELIVERY_REQUEST_UPDATE,
        entity_id=request.id,
        status=status,
        title=title,
        message=message,
        action_url=VOLUNTEER_DELIVERIES_URL,
        metadata={"request_id": request.id, "order_id": request.order_id, "status": status},
    )


__all__ = [
    "milestone_copy",
    "notify_challenge_milestone",
    "notify_delivery_assigned",
    "notify_delivery_completed",
    "notify_delivery_request_update",
    "notify_order_created",
    "notify_order_status_change",
    "notify_payment_failed",
    "notify_payment_verified",
    "notify_zone_assigned",
]
