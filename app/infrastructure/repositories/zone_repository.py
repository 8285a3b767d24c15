"""Read access to delivery zones."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Zone
from app.infrastructure.models import ZoneModel


class ZoneRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, zone_id: str) -> Zone | None:
        model = self.session.get(ZoneModel, zone_id)
        return Zone(id=model.id, name=model.name) if model else None


__all__ = ["ZoneRepository"]
