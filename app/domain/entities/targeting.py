"""Value object describing who a broadcast should reach."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import ROLE_ADMIN, ROLE_CUSTOMER, ROLE_VOLUNTEER

SCOPE_ALL = "all"
SCOPE_ROLE = "role"
SCOPE_INDIVIDUAL = "individual"
TARGETING_SCOPES = (SCOPE_ALL, SCOPE_ROLE, SCOPE_INDIVIDUAL)

TARGETABLE_ROLES = (ROLE_VOLUNTEER, ROLE_CUSTOMER, ROLE_ADMIN)


class TargetingError(ValueError):
    """Raised when a targeting spec cannot be resolved."""


@dataclass(frozen=True)
class TargetingSpec:
    """Broadcast intent: ``all``, one ``role`` or an explicit list of ``ids``."""

    scope: str
    role: str | None = None
    ids: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.scope not in TARGETING_SCOPES:
            raise TargetingError(f"Unknown targeting scope '{self.scope}'")
        if self.scope == SCOPE_ROLE and self.role not in TARGETABLE_ROLES:
            raise TargetingError(
                f"Role scope requires one of {', '.join(TARGETABLE_ROLES)}"
            )
        if self.scope == SCOPE_INDIVIDUAL:
            ids = tuple(str(identity) for identity in self.ids if identity)
            if not ids:
                raise TargetingError("Individual scope requires at least one id")
            object.__setattr__(self, "ids", ids)

    @classmethod
    def everyone(cls) -> "TargetingSpec":
        return cls(scope=SCOPE_ALL)

    @classmethod
    def for_role(cls, role: str) -> "TargetingSpec":
        return cls(scope=SCOPE_ROLE, role=role)

    @classmethod
    def for_ids(cls, ids) -> "TargetingSpec":
        return cls(scope=SCOPE_INDIVIDUAL, ids=tuple(ids or ()))


__all__ = [
    "SCOPE_ALL",
    "SCOPE_ROLE",
    "SCOPE_INDIVIDUAL",
    "TARGETING_SCOPES",
    "TARGETABLE_ROLES",
    "TargetingError",
    "TargetingSpec",
]
