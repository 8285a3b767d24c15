"""Repository implementations for infrastructure layer."""

from .delivery_request_repository import DeliveryRequestRepository
from .notification_repository import NotificationRepository
from .order_repository import OrderRepository
from .profile_repository import ProfileRepository
from .zone_repository import ZoneRepository

__all__ = [
    "DeliveryRequestRepository",
    "NotificationRepository",
    "OrderRepository",
    "ProfileRepository",
    "ZoneRepository",
]
