"""Errors raised by the notification use cases."""


class NotificationNotFoundError(LookupError):
    """A trigger referenced an order, volunteer, zone or request that does not exist."""


__all__ = ["NotificationNotFoundError"]
