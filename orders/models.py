"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- Order (id, pickup_id) - references its pickup site indirectly
- PickupSite (id, location) - the kitchen/restaurant an order is collected from

Rule: No dispatch logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from routing.geodistance import GeoPoint


@dataclass(frozen=True)
class Order:
    """
    A pending order. It does not carry coordinates; the pickup site is
    resolved by id within the same snapshot; a None pickup_id never resolves.
    """

    id: str
    pickup_id: Optional[str]


@dataclass(frozen=True)
class PickupSite:
    """
    The physical origin an order must be collected from (e.g. a cook's kitchen).
    """

    id: str
    location: GeoPoint

    @staticmethod
    def new(site_id: str, lat: float, lng: float) -> PickupSite:
        return PickupSite(id=site_id, location=GeoPoint(float(lat), float(lng)))
