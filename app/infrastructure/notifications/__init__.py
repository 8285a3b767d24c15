"""Channel delivery and realtime helpers for the infrastructure layer."""

from .channels import (
    ChannelSender,
    ChannelSendResult,
    EmailChannelSender,
    SmsChannelSender,
    absolute_action_url,
    default_channel_senders,
)
from .manager import NotificationConnectionManager, notification_manager
from .pool import (
    CHANNEL_SEND_TIMEOUT_SECONDS,
    ChannelDeliveryPool,
    ChannelTimeoutError,
    get_delivery_pool,
    shutdown_delivery_pool,
)
from .publisher import (
    NotificationPublisher,
    notification_publisher,
    serialize_notification,
)
from .status import DeliveryStatusRecorder

__all__ = [
    "ChannelSender",
    "ChannelSendResult",
    "EmailChannelSender",
    "SmsChannelSender",
    "absolute_action_url",
    "default_channel_senders",
    "NotificationConnectionManager",
    "notification_manager",
    "CHANNEL_SEND_TIMEOUT_SECONDS",
    "ChannelDeliveryPool",
    "ChannelTimeoutError",
    "get_delivery_pool",
    "shutdown_delivery_pool",
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
    "DeliveryStatusRecorder",
]
