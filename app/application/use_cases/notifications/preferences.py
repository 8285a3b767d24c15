"""Pass-through read and update of recipient notification preferences."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import ROLE_CUSTOMER, ROLE_VOLUNTEER, RecipientPreferences
from app.infrastructure.repositories import ProfileRepository

from .errors import NotificationNotFoundError

PREFERENCE_ROLES = (ROLE_VOLUNTEER, ROLE_CUSTOMER)


def _ensure_profile(repository: ProfileRepository, recipient_id: str, role: str) -> None:
    if role not in PREFERENCE_ROLES:
        raise ValueError(f"Preferences are not stored for role '{role}'")
    if role == ROLE_VOLUNTEER:
        exists = repository.get_volunteer(recipient_id) is not None
    else:
        exists = repository.get_customer(recipient_id) is not None
    if not exists:
        raise NotificationNotFoundError(f"{role.capitalize()} {recipient_id} not found")


def get_preferences(session: Session, *, recipient_id: str, role: str) -> RecipientPreferences:
    """Return the stored preferences, or the defaults flagged ``is_default``."""

    repository = ProfileRepository(session)
    _ensure_profile(repository, recipient_id, role)
    stored = repository.get_preferences(recipient_id, role)
    return stored if stored is not None else RecipientPreferences.defaults()


def update_preferences(
    session: Session,
    *,
    recipient_id: str,
    role: str,
    changes: Mapping[str, Any],
) -> RecipientPreferences:
    """Merge ``changes`` into the current preferences and persist the result."""

    repository = ProfileRepository(session)
    current = get_preferences(session, recipient_id=recipient_id, role=role)
    return repository.update_preferences(recipient_id, role, current.merged(changes))


__all__ = ["PREFERENCE_ROLES", "get_preferences", "update_preferences"]
