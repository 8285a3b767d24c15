"""Resolved notification recipients.

A recipient is one of four variants: :class:`VolunteerRecipient`,
:class:`CustomerRecipient`, :class:`AdminRecipient` or :class:`PublicRecipient`.
Equality and hashing use the ``(identity, role)`` pair so resolved lists can be
deduplicated with a plain ``set``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .notification import ROLE_ADMIN, ROLE_CUSTOMER, ROLE_PUBLIC, ROLE_VOLUNTEER


@dataclass(frozen=True)
class Recipient:
    """Base class for an ``(identity, role)`` pair eligible for a notification."""

    id: str | None
    role: ClassVar[str]
    # Whether stored preferences are consulted before delivery.
    gated: ClassVar[bool] = True

    @property
    def key(self) -> tuple[str | None, str]:
        return (self.id, self.role)

    @property
    def is_public(self) -> bool:
        return self.role == ROLE_PUBLIC

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipient):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(frozen=True, eq=False)
class VolunteerRecipient(Recipient):
    id: str
    role: ClassVar[str] = ROLE_VOLUNTEER


@dataclass(frozen=True, eq=False)
class CustomerRecipient(Recipient):
    id: str
    role: ClassVar[str] = ROLE_CUSTOMER


@dataclass(frozen=True, eq=False)
class AdminRecipient(Recipient):
    id: str
    email: str | None = None
    role: ClassVar[str] = ROLE_ADMIN
    gated: ClassVar[bool] = False


@dataclass(frozen=True, eq=False)
class PublicRecipient(Recipient):
    id: None = None
    role: ClassVar[str] = ROLE_PUBLIC
    gated: ClassVar[bool] = False


PUBLIC_RECIPIENT = PublicRecipient()


__all__ = [
    "Recipient",
    "VolunteerRecipient",
    "CustomerRecipient",
    "AdminRecipient",
    "PublicRecipient",
    "PUBLIC_RECIPIENT",
]
