"""Domain entity representing a customer."""

from dataclasses import dataclass


@dataclass
class Customer:
    """Customer profile fields needed to address notifications."""

    id: str
    name: str
    email: str | None = None
    phone: str | None = None


__all__ = ["Customer"]
