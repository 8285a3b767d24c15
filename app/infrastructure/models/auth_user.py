"""SQLAlchemy model for the authentication user directory."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base


class AuthUserModel(Base):
    """Authentication account; admin status comes from the email allow-list."""

    __tablename__ = "auth_user"

    id = Column(String(64), primary_key=True)
    email = Column(String(120), nullable=False, index=True)


__all__ = ["AuthUserModel"]
