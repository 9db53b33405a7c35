"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Accepts a dispatch snapshot (pending orders, drivers, pickup sites and the
reliability table) and, for each order independently, picks the best-scoring
driver with a greedy one-pass scan.

Policy for incomplete data: an order whose pickup site is unknown, or that has
no scoreable candidate, is skipped and reported; it never aborts the others.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from drivers.models import Driver
from drivers.reliability import ReliabilityTable
from orders.models import Order, PickupSite
from routing.spatial_index import DriverGridIndex

from .candidate_filter import build_base_candidates
from .policy import DispatchPolicy, default_dispatch_policy
from .scoring import CandidateScore, score_candidate

logger = logging.getLogger(__name__)


class SkipReason(str, Enum):
    UNKNOWN_PICKUP_SITE = "unknown_pickup_site"
    NO_ELIGIBLE_DRIVER = "no_eligible_driver"


@dataclass(frozen=True)
class DispatchSnapshot:
    """
    Everything one scoring cycle sees. Read-only for the whole invocation.
    """
    orders: List[Order] = field(default_factory=list)
    drivers: List[Driver] = field(default_factory=list)
    pickup_sites: List[PickupSite] = field(default_factory=list)
    reliability: ReliabilityTable = field(default_factory=dict)


@dataclass(frozen=True)
class Assignment:
    order_id: str
    driver_id: str
    score: float
    distance_km: float
    estimated_pickup_minutes: int


@dataclass(frozen=True)
class SkippedOrder:
    order_id: str
    reason: SkipReason


@dataclass(frozen=True)
class DispatchResult:
    """
    Output of one assignment run. Assignments follow the order of the input orders.
    """
    assignments: List[Assignment]
    skipped: List[SkippedOrder]

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def assign_drivers(snapshot: DispatchSnapshot, policy: Optional[DispatchPolicy] = None) -> DispatchResult:
    """
    Main assignment entry point (pure algorithm).

    For each order, in input order:
      1) resolve its pickup site by id (first occurrence wins); skip if unknown
      2) scan the candidate drivers in snapshot order, keeping the first one
         whose score strictly beats the best so far (ties go to the earliest)
      3) skip the order if nothing beat -inf (empty pool or all NaN scores)

    A selected driver stays available to later orders unless
    `policy.exclusive_drivers` is set.
    """
    policy = policy or default_dispatch_policy()
    policy.validate()

    sites: Dict[str, PickupSite] = {}
    for site in snapshot.pickup_sites:
        sites.setdefault(site.id, site)

    index: Optional[DriverGridIndex] = None
    if policy.max_pickup_radius_km is not None and snapshot.drivers:
        index = DriverGridIndex(snapshot.drivers, cell_km=policy.grid_cell_km, radius_km=policy.earth_radius_km)

    assignments: List[Assignment] = []
    skipped: List[SkippedOrder] = []
    reserved: Set[str] = set()

    for order in snapshot.orders:
        site = sites.get(order.pickup_id)
        if site is None:
            logger.debug("Order %s skipped: pickup site %s not in snapshot", order.id, order.pickup_id)
            skipped.append(SkippedOrder(order.id, SkipReason.UNKNOWN_PICKUP_SITE))
            continue

        candidates = build_base_candidates(site, snapshot.drivers, policy, index=index, reserved_ids=reserved)

        best: Optional[CandidateScore] = None
        best_score = -math.inf
        for driver in candidates:
            scored = score_candidate(driver, site, snapshot.reliability, policy)
            if scored.score > best_score:
                best = scored
                best_score = scored.score

        if best is None:
            logger.debug("Order %s skipped: no scoreable driver among %d candidates", order.id, len(candidates))
            skipped.append(SkippedOrder(order.id, SkipReason.NO_ELIGIBLE_DRIVER))
            continue

        assignments.append(
            Assignment(
                order_id=order.id,
                driver_id=best.driver_id,
                score=best.score,
                distance_km=best.distance_km,
                estimated_pickup_minutes=math.ceil(best.distance_km * policy.pickup_minutes_per_km),
            )
        )

        if policy.exclusive_drivers:
            reserved.add(best.driver_id)

    logger.info(
        "Assigned %d/%d orders across %d drivers (%d skipped)",
        len(assignments),
        len(snapshot.orders),
        len(snapshot.drivers),
        len(skipped),
    )
    return DispatchResult(assignments=assignments, skipped=skipped)


class Dispatcher:
    """
    Holds a validated policy and runs assignment cycles with it.
    Stateless between calls, so one instance can serve concurrent requests.
    """
    def __init__(self, policy: Optional[DispatchPolicy] = None):
        self.policy = policy or default_dispatch_policy()
        self.policy.validate()

    def dispatch(self, snapshot: DispatchSnapshot) -> DispatchResult:
        return assign_drivers(snapshot, self.policy)
