"""Per-recipient notification preferences."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from .notification import CHANNEL_EMAIL, CHANNEL_IN_APP


@dataclass(frozen=True)
class RecipientPreferences:
    """Opt-outs owned by a volunteer or customer profile.

    ``push_notifications`` toggles the in-app channel and
    ``email_notifications`` the email channel. Category flags are consulted
    through the gate's event-to-category table.
    """

    push_notifications: bool = True
    email_notifications: bool = True
    order_updates: bool = True
    payment_updates: bool = True
    delivery_updates: bool = True
    challenge_milestones: bool = True
    system_alerts: bool = True
    promotional: bool = True
    is_default: bool = False

    def channel_enabled(self, channel: str) -> bool:
        if channel == CHANNEL_IN_APP:
            return self.push_notifications
        if channel == CHANNEL_EMAIL:
            return self.email_notifications
        return True

    def category_enabled(self, flag: str) -> bool:
        return bool(getattr(self, flag, True))

    def merged(self, partial: Mapping[str, Any]) -> "RecipientPreferences":
        """Return a copy with the known boolean fields of ``partial`` applied."""

        updates = {
            name: bool(value)
            for name, value in partial.items()
            if name in PREFERENCE_FLAGS and value is not None
        }
        return replace(self, is_default=False, **updates)

    def to_mapping(self) -> dict[str, bool]:
        data = asdict(self)
        data.pop("is_default")
        return data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "RecipientPreferences | None":
        if data is None:
            return None
        values = {
            name: bool(data[name])
            for name in PREFERENCE_FLAGS
            if name in data and data[name] is not None
        }
        return cls(**values)

    @classmethod
    def defaults(cls) -> "RecipientPreferences":
        return cls(is_default=True)


PREFERENCE_FLAGS = tuple(
    item.name for item in fields(RecipientPreferences) if item.name != "is_default"
)


__all__ = ["RecipientPreferences", "PREFERENCE_FLAGS"]
