"""Domain entity representing a referral/delivery volunteer."""

from dataclasses import dataclass


@dataclass
class Volunteer:
    """Volunteer profile as seen by the notification core.

    Only volunteers linked to an authentication identity (``auth_id``) can
    receive in-app notifications.
    """

    id: str
    name: str
    auth_id: str | None = None
    email: str | None = None
    zone_id: str | None = None

    @property
    def can_receive(self) -> bool:
        return bool(self.auth_id)


__all__ = ["Volunteer"]
