"""Domain entity representing a volunteer delivery request."""

from dataclasses import dataclass


@dataclass
class DeliveryRequest:
    """Request raised by a volunteer to take over an order's delivery."""

    id: str
    volunteer_id: str
    status: str
    order_id: str | None = None


__all__ = ["DeliveryRequest"]
