"""Read access to volunteer delivery requests."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import DeliveryRequest
from app.infrastructure.models import DeliveryRequestModel


class DeliveryRequestRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, request_id: str) -> DeliveryRequest | None:
        model = self.session.get(DeliveryRequestModel, request_id)
        if model is None:
            return None
        return DeliveryRequest(
            id=model.id,
            volunteer_id=model.volunteer_id,
            status=model.status,
            order_id=model.order_id,
        )


__all__ = ["DeliveryRequestRepository"]
