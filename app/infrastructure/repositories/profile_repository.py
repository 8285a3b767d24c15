"""Identity and profile lookups across volunteers, customers and auth users."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import (
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_VOLUNTEER,
    AuthUser,
    Customer,
    Recipient,
    RecipientPreferences,
    Volunteer,
)
from app.infrastructure.models import AuthUserModel, CustomerModel, VolunteerModel


class ProfileRepository:
    """Read access to the three identity namespaces plus preference storage."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_volunteers(self) -> Sequence[Volunteer]:
        query = self.session.query(VolunteerModel).order_by(VolunteerModel.id)
        return [self._volunteer_to_entity(model) for model in query.all()]

    def list_customers(self) -> Sequence[Customer]:
        query = self.session.query(CustomerModel).order_by(CustomerModel.id)
        return [self._customer_to_entity(model) for model in query.all()]

    def list_admin_auth_users(self) -> Sequence[AuthUser]:
        """Return every account of the auth directory; callers apply the allow-list."""

        query = self.session.query(AuthUserModel).order_by(AuthUserModel.id)
        return [AuthUser(id=model.id, email=model.email) for model in query.all()]

    def get_volunteer(self, volunteer_id: str) -> Volunteer | None:
        model = self.session.get(VolunteerModel, volunteer_id)
        return self._volunteer_to_entity(model) if model else None

    def find_volunteer_by_identity(self, identity: str) -> Volunteer | None:
        """Match ``identity`` against the volunteer id or its linked auth id."""

        model = (
            self.session.query(VolunteerModel)
            .filter(
                or_(VolunteerModel.id == identity, VolunteerModel.auth_id == identity)
            )
            .order_by(VolunteerModel.id)
            .first()
        )
        return self._volunteer_to_entity(model) if model else None

    def get_customer(self, customer_id: str) -> Customer | None:
        model = self.session.get(CustomerModel, customer_id)
        return self._customer_to_entity(model) if model else None

    def get_auth_user(self, user_id: str) -> AuthUser | None:
        model = self.session.get(AuthUserModel, user_id)
        return AuthUser(id=model.id, email=model.email) if model else None

    def get_preferences(self, identity: str, role: str) -> RecipientPreferences | None:
        model = self._get_profile_model(identity, role)
        if model is None:
            return None
        return RecipientPreferences.from_mapping(model.notification_preferences)

    def update_preferences(
        self, identity: str, role: str, preferences: RecipientPreferences
    ) -> RecipientPreferences:
        model = self._get_profile_model(identity, role)
        if model is None:
            msg = f"{role.capitalize()} with id {identity} not found"
            raise ValueError(msg)
        model.notification_preferences = preferences.to_mapping()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return RecipientPreferences.from_mapping(model.notification_preferences)

    def get_preferences_many(
        self, recipients: Iterable[Recipient]
    ) -> dict[tuple[str | None, str], RecipientPreferences | None]:
        """Load preferences for ``recipients`` with one query per namespace."""

        wanted = self._ids_by_role(recipients, (ROLE_VOLUNTEER, ROLE_CUSTOMER))
        found: dict[tuple[str | None, str], RecipientPreferences | None] = {}
        for role, model_cls in ((ROLE_VOLUNTEER, VolunteerModel), (ROLE_CUSTOMER, CustomerModel)):
            ids = wanted.get(role)
            if not ids:
                continue
            rows = (
                self.session.query(model_cls.id, model_cls.notification_preferences)
                .filter(model_cls.id.in_(ids))
                .all()
            )
            for identity, stored in rows:
                found[(identity, role)] = RecipientPreferences.from_mapping(stored)
        return found

    def get_emails(
        self, recipients: Iterable[Recipient]
    ) -> dict[tuple[str | None, str], str]:
        """Return the email address of every recipient that has one."""

        wanted = self._ids_by_role(recipients, (ROLE_VOLUNTEER, ROLE_CUSTOMER, ROLE_ADMIN))
        emails: dict[tuple[str | None, str], str] = {}
        for role, model_cls in (
            (ROLE_VOLUNTEER, VolunteerModel),
            (ROLE_CUSTOMER, CustomerModel),
            (ROLE_ADMIN, AuthUserModel),
        ):
            ids = wanted.get(role)
            if not ids:
                continue
            rows = (
                self.session.query(model_cls.id, model_cls.email)
                .filter(model_cls.id.in_(ids))
                .all()
            )
            for identity, email in rows:
                if email:
                    emails[(identity, role)] = email
        return emails

    @staticmethod
    def _ids_by_role(
        recipients: Iterable[Recipient], roles: tuple[str, ...]
    ) -> dict[str, set[str]]:
        grouped: dict[str, set[str]] = {}
        for recipient in recipients:
            if recipient.role in roles and recipient.id:
                grouped.setdefault(recipient.role, set()).add(recipient.id)
        return grouped

    def _get_profile_model(self, identity: str, role: str):
        if role == ROLE_VOLUNTEER:
            return self.session.get(VolunteerModel, identity)
        if role == ROLE_CUSTOMER:
            return self.session.get(CustomerModel, identity)
        return None

    @staticmethod
    def _volunteer_to_entity(model: VolunteerModel) -> Volunteer:
        return Volunteer(
            id=model.id,
            name=model.name,
            auth_id=model.auth_id,
            email=model.email,
            zone_id=model.zone_id,
        )

    @staticmethod
    def _customer_to_entity(model: CustomerModel) -> Customer:
        return Customer(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
        )


__all__ = ["ProfileRepository"]
