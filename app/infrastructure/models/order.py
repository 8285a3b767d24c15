"""SQLAlchemy model for customer orders."""

from sqlalchemy import Column, DateTime, Float, Integer, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class OrderModel(Base):
    """Database representation of an order."""

    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    customer_id = Column(String(64), nullable=True, index=True)
    customer_name = Column(String(120), nullable=False)
    referred_by = Column(String(64), nullable=True, index=True)
    volunteer_id = Column(String(64), nullable=True)
    order_status = Column(String(30), nullable=False, default="pending")
    quantity = Column(Integer, nullable=False, default=1)
    total_price = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["OrderModel"]
