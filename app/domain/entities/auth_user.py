"""Domain entity representing an account in the authentication directory."""

from dataclasses import dataclass


@dataclass
class AuthUser:
    """Authentication account; administrators are allow-listed accounts."""

    id: str
    email: str


__all__ = ["AuthUser"]
