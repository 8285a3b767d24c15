"""Read access to orders for notification triggers."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Order
from app.infrastructure.models import OrderModel
from app.utils import ensure_app_timezone


class OrderRepository:
    """Load order rows as :class:`Order` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, order_id: str) -> Order | None:
        model = self.session.get(OrderModel, order_id)
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: OrderModel) -> Order:
        return Order(
            id=model.id,
            customer_name=model.customer_name,
            order_status=model.order_status,
            customer_id=model.customer_id,
            referred_by=model.referred_by,
            volunteer_id=model.volunteer_id,
            quantity=model.quantity,
            total_price=model.total_price,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["OrderRepository"]
