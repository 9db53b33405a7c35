"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a Driver (courier) at the moment a dispatch snapshot
was taken, without relying on Django ORM constraints.
"""

from __future__ import annotations

from dataclasses import dataclass

from routing.geodistance import GeoPoint


@dataclass(frozen=True)
class Driver:
    """
    A purely stateless representation of a Driver at a specific point in time.
    """
    id: str
    location: GeoPoint

    @classmethod
    def new(cls, driver_id: str, lat: float, lng: float) -> Driver:
        return cls(id=driver_id, location=GeoPoint(float(lat), float(lng)))
