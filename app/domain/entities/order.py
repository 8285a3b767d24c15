"""Domain entity representing a customer order."""

from dataclasses import dataclass
from datetime import datetime

ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_CONFIRMED = "confirmed"
ORDER_STATUS_OUT_FOR_DELIVERY = "out_for_delivery"
ORDER_STATUS_DELIVERED = "delivered"
ORDER_STATUS_CANCELLED = "cancelled"


@dataclass
class Order:
    """Order context loaded by notification triggers."""

    id: str
    customer_name: str
    order_status: str
    customer_id: str | None = None
    referred_by: str | None = None
    volunteer_id: str | None = None
    quantity: int = 1
    total_price: float = 0.0
    created_at: datetime | None = None

    @property
    def short_id(self) -> str:
        return self.id[:8]


__all__ = [
    "Order",
    "ORDER_STATUS_PENDING",
    "ORDER_STATUS_CONFIRMED",
    "ORDER_STATUS_OUT_FOR_DELIVERY",
    "ORDER_STATUS_DELIVERED",
    "ORDER_STATUS_CANCELLED",
]
