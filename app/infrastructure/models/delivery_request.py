"""SQLAlchemy model for volunteer delivery requests."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base


class DeliveryRequestModel(Base):
    """Database representation of a delivery request."""

    __tablename__ = "delivery_request"

    id = Column(String(64), primary_key=True)
    volunteer_id = Column(String(64), nullable=False, index=True)
    order_id = Column(String(64), nullable=True)
    status = Column(String(30), nullable=False, default="pending")


__all__ = ["DeliveryRequestModel"]
