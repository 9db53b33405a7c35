#Purpose: Ranking/selection model (the "who is best" layer).
#Takes one candidate driver + the pickup site + the reliability table.
#Produces a single comparable score, higher is strictly preferred:
#score = reliability - distance_km * distance_weight
#Unscored drivers use the policy's default reliability.
#Output: CandidateScore (score plus the features it was built from).

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from drivers.models import Driver
from drivers.reliability import ReliabilityTable, reliability_for
from orders.models import PickupSite
from routing.geodistance import haversine_km

from .policy import DispatchPolicy, default_dispatch_policy


@dataclass(frozen=True)
class CandidateScore:
    """
    The score of one driver against one pickup site, with its inputs kept
    for diagnostics.
    """
    driver_id: str
    distance_km: float
    reliability: float
    score: float


def score_candidate(
    driver: Driver,
    pickup: PickupSite,
    reliability_table: Optional[ReliabilityTable] = None,
    policy: Optional[DispatchPolicy] = None,
) -> CandidateScore:
    policy = policy or default_dispatch_policy()

    distance_km = haversine_km(driver.location, pickup.location, policy.earth_radius_km)
    reliability = reliability_for(reliability_table, driver.id, policy.default_reliability)

    return CandidateScore(
        driver_id=driver.id,
        distance_km=distance_km,
        reliability=reliability,
        score=reliability - distance_km * policy.distance_weight,
    )


def score_driver(
    driver: Driver,
    pickup: PickupSite,
    reliability_table: Optional[ReliabilityTable] = None,
    policy: Optional[DispatchPolicy] = None,
) -> float:
    """
    Score only. NaN means the driver could not be scored (bad coordinates).
    """
    return score_candidate(driver, pickup, reliability_table, policy).score
