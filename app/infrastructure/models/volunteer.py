"""SQLAlchemy model for the volunteer table."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base

from ._types import json_type


class VolunteerModel(Base):
    """Database representation of a volunteer profile."""

    __tablename__ = "volunteer"

    id = Column(String(64), primary_key=True)
    auth_id = Column(String(64), nullable=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True)
    zone_id = Column(String(64), nullable=True)
    notification_preferences = Column(json_type, nullable=True)


__all__ = ["VolunteerModel"]
