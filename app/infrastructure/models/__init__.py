"""ORM models used by the application infrastructure."""

from .auth_user import AuthUserModel
from .customer import CustomerModel
from .delivery_request import DeliveryRequestModel
from .notification import NotificationModel
from .order import OrderModel
from .volunteer import VolunteerModel
from .zone import ZoneModel

__all__ = [
    "AuthUserModel",
    "CustomerModel",
    "DeliveryRequestModel",
    "NotificationModel",
    "OrderModel",
    "VolunteerModel",
    "ZoneModel",
]
