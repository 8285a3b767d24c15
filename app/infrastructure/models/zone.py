"""SQLAlchemy model for delivery zones."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base


class ZoneModel(Base):
    """Database representation of a delivery zone."""

    __tablename__ = "delivery_zone"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=False)


__all__ = ["ZoneModel"]
