"""FastAPI dependency utilities."""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import RECIPIENT_ROLES, ROLE_ADMIN, ROLE_PUBLIC
from app.infrastructure.database import get_db
from app.infrastructure.repositories import ProfileRepository


@dataclass(frozen=True)
class Caller:
    """Identity forwarded by the authenticating gateway in front of the service."""

    recipient_id: str | None
    role: str

    @property
    def is_anonymous(self) -> bool:
        return self.recipient_id is None

    @property
    def key(self) -> tuple[str | None, str]:
        return (self.recipient_id, self.role)


def parse_caller(recipient_id: str | None, role: str | None) -> Caller:
    """Build a :class:`Caller` from raw header values.

    Raises ``ValueError`` when an identity comes with an unusable role.
    """

    if not recipient_id:
        return Caller(recipient_id=None, role=ROLE_PUBLIC)
    role = (role or "").strip().lower()
    if role not in RECIPIENT_ROLES or role == ROLE_PUBLIC:
        raise ValueError("X-Recipient-Role must be volunteer, customer or admin")
    return Caller(recipient_id=recipient_id.strip(), role=role)


def get_caller(
    x_recipient_id: str | None = Header(default=None),
    x_recipient_role: str | None = Header(default=None),
) -> Caller:
    """Return the caller described by the ``X-Recipient-*`` headers."""

    try:
        return parse_caller(x_recipient_id, x_recipient_role)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


def get_identified_caller(caller: Caller = Depends(get_caller)) -> Caller:
    """Reject anonymous callers."""

    if caller.is_anonymous:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Recipient identity required",
        )
    return caller


def require_admin(
    caller: Caller = Depends(get_identified_caller),
    db: Session = Depends(get_db),
) -> Caller:
    """Ensure the caller is an auth account on the admin allow-list."""

    user = ProfileRepository(db).get_auth_user(caller.recipient_id)
    allowed = get_settings().admin_allow_list()
    if (
        caller.role != ROLE_ADMIN
        or user is None
        or not user.email
        or user.email.strip().lower() not in allowed
    ):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return caller
