"""SQLAlchemy model for the customer table."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base

from ._types import json_type


class CustomerModel(Base):
    """Database representation of a customer profile."""

    __tablename__ = "customer"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True)
    phone = Column(String(30), nullable=True)
    notification_preferences = Column(json_type, nullable=True)


__all__ = ["CustomerModel"]
