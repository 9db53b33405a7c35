#Purpose: Hard eligibility gates (rule gates) ahead of scoring.
#Builds the base candidate set for one order before it is scored.
#Responsibilities:
#drivers already reserved in this invocation (exclusive mode only)
#optional pickup radius, answered by the grid index
#Output: "rule-qualified drivers" in snapshot order (still not ranked).

from __future__ import annotations

from typing import AbstractSet, List, Optional, Sequence

from drivers.models import Driver
from orders.models import PickupSite
from routing.spatial_index import DriverGridIndex

from .policy import DispatchPolicy, default_dispatch_policy


def build_base_candidates(
    pickup: PickupSite,
    drivers: Sequence[Driver],
    policy: Optional[DispatchPolicy] = None,
    *,
    index: Optional[DriverGridIndex] = None,
    reserved_ids: AbstractSet[str] = frozenset(),
) -> List[Driver]:
    """
    Candidate drivers for a single pickup site.

    Without a pickup radius every driver is a candidate (a plain linear scan).
    With one, the grid index narrows the pool; it is built on the fly when the
    caller did not pass one. Snapshot order is preserved either way so that
    ties resolve to the earliest driver.
    """
    policy = policy or default_dispatch_policy()

    if policy.max_pickup_radius_km is None:
        pool = list(drivers)
    else:
        if index is None:
            index = DriverGridIndex(drivers, cell_km=policy.grid_cell_km, radius_km=policy.earth_radius_km)
        pool = index.candidates_near(pickup.location, policy.max_pickup_radius_km)

    if reserved_ids:
        pool = [driver for driver in pool if driver.id not in reserved_ids]

    return pool
