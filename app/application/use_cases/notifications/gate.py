"""Preference gate deciding whether a recipient receives a notification."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities import (
    CHANNEL_IN_APP,
    CRITICAL_EVENT_TYPES,
    EVENT_CHALLENGE_MILESTONE,
    EVENT_DELIVERY_UPDATE,
    EVENT_ORDER_UPDATE,
    EVENT_PAYMENT_VERIFIED,
    EVENT_REFERRAL_UPDATE,
    Recipient,
    RecipientPreferences,
)

from .ports import ProfileStore, RecipientKey

CATEGORY_PREFERENCE_FIELDS: dict[str, str] = {
    EVENT_ORDER_UPDATE: "order_updates",
    EVENT_REFERRAL_UPDATE: "order_updates",
    EVENT_PAYMENT_VERIFIED: "payment_updates",
    EVENT_CHALLENGE_MILESTONE: "challenge_milestones",
    EVENT_DELIVERY_UPDATE: "delivery_updates",
}

_MISSING = object()


def is_critical(event_type: str) -> bool:
    return event_type in CRITICAL_EVENT_TYPES


class PreferenceGate:
    """Apply stored opt-outs, with an unconditional override for critical events.

    Preferences are cached per gate instance; :meth:`prefetch` loads a whole
    broadcast's preferences in bulk so each decision is a dictionary lookup.
    """

    def __init__(self, profiles: ProfileStore) -> None:
        self._profiles = profiles
        self._cache: dict[RecipientKey, RecipientPreferences | None] = {}

    def prefetch(self, recipients: Iterable[Recipient]) -> None:
        pending = [
            recipient
            for recipient in recipients
            if recipient.gated and recipient.key not in self._cache
        ]
        if not pending:
            return
        loaded = self._profiles.get_preferences_many(pending)
        for recipient in pending:
            self._cache[recipient.key] = loaded.get(recipient.key)

    def should_send(
        self, recipient: Recipient, event_type: str, channel: str = CHANNEL_IN_APP
    ) -> bool:
        if is_critical(event_type):
            return True
        if not recipient.gated:
            return True

        preferences = self._preferences_for(recipient)
        if preferences is None:
            return True
        if not preferences.channel_enabled(channel):
            return False

        flag = CATEGORY_PREFERENCE_FIELDS.get(event_type)
        if flag is None:
            return True
        return preferences.category_enabled(flag)

    def _preferences_for(self, recipient: Recipient) -> RecipientPreferences | None:
        cached = self._cache.get(recipient.key, _MISSING)
        if cached is not _MISSING:
            return cached
        preferences = self._profiles.get_preferences(recipient.id, recipient.role)
        self._cache[recipient.key] = preferences
        return preferences


__all__ = ["CATEGORY_PREFERENCE_FIELDS", "PreferenceGate", "is_critical"]
