"""Domain entities exposed by the application."""

from .auth_user import AuthUser
from .customer import Customer
from .delivery_request import DeliveryRequest
from .event_type import (
    CRITICAL_EVENT_TYPES,
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
    EVENT_SYSTEM_ANNOUNCEMENT,
    EVENT_TYPES,
    EVENT_ZONE_ASSIGNED,
    build_event_key,
)
from .notification import (
    CATEGORY_ACHIEVEMENT,
    CATEGORY_ADMIN,
    CATEGORY_DELIVERY,
    CATEGORY_ORDER,
    CATEGORY_SYSTEM,
    CATEGORY_ZONE,
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_SMS,
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_PENDING,
    DELIVERY_STATUS_SENT,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    RECIPIENT_ROLES,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_PUBLIC,
    ROLE_VOLUNTEER,
    Notification,
)
from .order import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_CONFIRMED,
    ORDER_STATUS_DELIVERED,
    ORDER_STATUS_OUT_FOR_DELIVERY,
    ORDER_STATUS_PENDING,
    Order,
)
from .preferences import PREFERENCE_FLAGS, RecipientPreferences
from .recipient import (
    PUBLIC_RECIPIENT,
    AdminRecipient,
    CustomerRecipient,
    PublicRecipient,
    Recipient,
    VolunteerRecipient,
)
from .targeting import (
    SCOPE_ALL,
    SCOPE_INDIVIDUAL,
    SCOPE_ROLE,
    TARGETABLE_ROLES,
    TargetingError,
    TargetingSpec,
)
from .volunteer import Volunteer
from .zone import Zone

__all__ = [
    "AuthUser",
    "Customer",
    "DeliveryRequest",
    "Notification",
    "Order",
    "RecipientPreferences",
    "PREFERENCE_FLAGS",
    "Recipient",
    "VolunteerRecipient",
    "CustomerRecipient",
    "AdminRecipient",
    "PublicRecipient",
    "PUBLIC_RECIPIENT",
    "TargetingError",
    "TargetingSpec",
    "SCOPE_ALL",
    "SCOPE_ROLE",
    "SCOPE_INDIVIDUAL",
    "TARGETABLE_ROLES",
    "Volunteer",
    "Zone",
    "ROLE_ADMIN",
    "ROLE_VOLUNTEER",
    "ROLE_CUSTOMER",
    "ROLE_PUBLIC",
    "RECIPIENT_ROLES",
    "CATEGORY_ORDER",
    "CATEGORY_DELIVERY",
    "CATEGORY_ACHIEVEMENT",
    "CATEGORY_ZONE",
    "CATEGORY_SYSTEM",
    "CATEGORY_ADMIN",
    "NOTIFICATION_CATEGORIES",
    "PRIORITY_CRITICAL",
    "PRIORITY_HIGH",
    "PRIORITY_MEDIUM",
    "PRIORITY_LOW",
    "NOTIFICATION_PRIORITIES",
    "DELIVERY_STATUS_PENDING",
    "DELIVERY_STATUS_SENT",
    "DELIVERY_STATUS_FAILED",
    "CHANNEL_IN_APP",
    "CHANNEL_EMAIL",
    "CHANNEL_SMS",
    "ORDER_STATUS_PENDING",
    "ORDER_STATUS_CONFIRMED",
    "ORDER_STATUS_OUT_FOR_DELIVERY",
    "ORDER_STATUS_DELIVERED",
    "ORDER_STATUS_CANCELLED",
    "EVENT_ORDER_CREATED",
    "EVENT_ORDER_UPDATE",
    "EVENT_ORDER_CANCELLED",
    "EVENT_REFERRAL_UPDATE",
    "EVENT_PAYMENT_FAILED",
    "EVENT_PAYMENT_VERIFIED",
    "EVENT_DELIVERY_UPDATE",
    "EVENT_DELIVERY_REQUEST_UPDATE",
    "EVENT_CHALLENGE_MILESTONE",
    "EVENT_ZONE_ASSIGNED",
    "EVENT_SYSTEM_ANNOUNCEMENT",
    "EVENT_ADMIN_ACTION",
    "EVENT_TYPES",
    "CRITICAL_EVENT_TYPES",
    "build_event_key",
]
