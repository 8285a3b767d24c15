"""Domain entity representing a delivery zone."""

from dataclasses import dataclass


@dataclass
class Zone:
    """Delivery zone a volunteer can be assigned to."""

    id: str
    name: str


__all__ = ["Zone"]
