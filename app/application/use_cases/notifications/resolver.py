"""Turn a targeting spec into a deduplicated list of recipients."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities import (
    PUBLIC_RECIPIENT,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_VOLUNTEER,
    SCOPE_ALL,
    SCOPE_INDIVIDUAL,
    SCOPE_ROLE,
    AdminRecipient,
    AuthUser,
    CustomerRecipient,
    Recipient,
    TargetingError,
    TargetingSpec,
    VolunteerRecipient,
)

from .ports import ProfileStore


class RecipientResolver:
    """Resolve recipients across volunteers, customers and administrators.

    Administrators are accounts from the auth directory whose email appears in
    ``admin_emails``. Volunteers without a linked auth identity are skipped.
    """

    def __init__(self, profiles: ProfileStore, *, admin_emails: Iterable[str]) -> None:
        self._profiles = profiles
        self._admin_emails = frozenset(
            email.strip().lower() for email in admin_emails if email and email.strip()
        )

    def resolve(self, spec: TargetingSpec) -> list[Recipient]:
        if not isinstance(spec, TargetingSpec):
            raise TargetingError("A TargetingSpec is required")

        if spec.scope == SCOPE_ALL:
            recipients: list[Recipient] = [
                *self.volunteers(),
                *self.customers(),
                PUBLIC_RECIPIENT,
            ]
        elif spec.scope == SCOPE_ROLE:
            recipients = self._by_role(spec.role)
        elif spec.scope == SCOPE_INDIVIDUAL:
            recipients = [
                recipient
                for recipient in (self.lookup(identity) for identity in spec.ids)
                if recipient is not None
            ]
        else:  # pragma: no cover - rejected by TargetingSpec
            raise TargetingError(f"Unknown targeting scope '{spec.scope}'")
        return dedupe(recipients)

    def volunteers(self) -> list[VolunteerRecipient]:
        return [
            VolunteerRecipient(volunteer.id)
            for volunteer in self._profiles.list_volunteers()
            if volunteer.can_receive
        ]

    def customers(self) -> list[CustomerRecipient]:
        return [CustomerRecipient(customer.id) for customer in self._profiles.list_customers()]

    def admins(self) -> list[AdminRecipient]:
        return [
            AdminRecipient(user.id, email=user.email)
            for user in self._profiles.list_admin_auth_users()
            if self.is_admin(user)
        ]

    def is_admin(self, user: AuthUser) -> bool:
        return bool(user.email) and user.email.strip().lower() in self._admin_emails

    def lookup(self, identity: str) -> Recipient | None:
        """Probe volunteers, then customers, then admins; first match wins."""

        volunteer = self._profiles.find_volunteer_by_identity(identity)
        if volunteer is not None and volunteer.can_receive:
            return VolunteerRecipient(volunteer.id)
        customer = self._profiles.get_customer(identity)
        if customer is not None:
            return CustomerRecipient(customer.id)
        user = self._profiles.get_auth_user(identity)
        if user is not None and self.is_admin(user):
            return AdminRecipient(user.id, email=user.email)
        return None

    def volunteer(self, volunteer_id: str | None) -> VolunteerRecipient | None:
        """Return the recipient for a known volunteer id if it can receive."""

        if not volunteer_id:
            return None
        volunteer = self._profiles.get_volunteer(volunteer_id)
        if volunteer is None or not volunteer.can_receive:
            return None
        return VolunteerRecipient(volunteer.id)

    def customer(self, customer_id: str | None) -> CustomerRecipient | None:
        if not customer_id:
            return None
        return CustomerRecipient(customer_id)

    def _by_role(self, role: str | None) -> list[Recipient]:
        if role == ROLE_VOLUNTEER:
            return list(self.volunteers())
        if role == ROLE_CUSTOMER:
            return list(self.customers())
        if role == ROLE_ADMIN:
            return list(self.admins())
        raise TargetingError(f"Role '{role}' cannot be targeted")


def dedupe(recipients: Iterable[Recipient]) -> list[Recipient]:
    """Drop repeated ``(identity, role)`` pairs keeping the first occurrence."""

    seen: set[tuple[str | None, str]] = set()
    unique: list[Recipient] = []
    for recipient in recipients:
        if recipient.key in seen:
            continue
        seen.add(recipient.key)
        unique.append(recipient)
    return unique


__all__ = ["RecipientResolver", "dedupe"]
