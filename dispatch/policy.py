"""
Purpose: Central configuration for driver assignment (single source of truth).
What it does:

Stores all tunable thresholds/weights for scoring and selecting drivers:

DISTANCE_WEIGHT = 8.0         (score points lost per km to the pickup)
DEFAULT_RELIABILITY = 50.0    (score for drivers absent from the reliability table)
EARTH_RADIUS_KM = 6371.0

Optionally loads overrides from the environment (.env supported).

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from routing.geodistance import EARTH_RADIUS_KM

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class DispatchPolicy:
    """
    Central configuration for the assignment engine.

    Notes:
    - score = reliability - distance_km * distance_weight, so one extra km must
      be offset by `distance_weight` points of reliability to stay preferable.
    - default_reliability must sit inside the range of real scores so unscored
      drivers are neither favored nor excluded.
    """

    # --- Scoring ---
    distance_weight: float = 8.0
    default_reliability: float = 50.0
    earth_radius_km: float = EARTH_RADIUS_KM

    # --- Selection ---
    # False: every order sees the full fleet (one driver may win several orders).
    # True: a selected driver leaves the pool for the rest of the invocation.
    exclusive_drivers: bool = False

    # --- Candidate bounding ---
    # None disables the radius gate and the grid index entirely.
    max_pickup_radius_km: Optional[float] = None
    grid_cell_km: float = 2.0

    # --- Reporting ---
    # estimated pickup minutes = ceil(distance_km * pickup_minutes_per_km)
    pickup_minutes_per_km: float = 3.0

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not math.isfinite(self.distance_weight) or self.distance_weight < 0:
            raise ValueError("distance_weight must be a finite number >= 0")

        if not math.isfinite(self.default_reliability):
            raise ValueError("default_reliability must be finite")

        if not self.earth_radius_km > 0:
            raise ValueError("earth_radius_km must be > 0")

        if self.max_pickup_radius_km is not None and not self.max_pickup_radius_km > 0:
            raise ValueError("max_pickup_radius_km must be > 0 when set")

        if not self.grid_cell_km > 0:
            raise ValueError("grid_cell_km must be > 0")

        if not self.pickup_minutes_per_km >= 0:
            raise ValueError("pickup_minutes_per_km must be >= 0")


def default_dispatch_policy() -> DispatchPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DispatchPolicy()
    p.validate()
    return p


def policy_from_env(environ: Optional[Mapping[str, str]] = None) -> DispatchPolicy:
    """
    Build a policy from DISPATCH_* environment variables.

    When `environ` is omitted, a .env file (if any) is loaded into os.environ
    first. Unset variables keep their defaults.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    defaults = DispatchPolicy()
    radius = _read_float(environ, "DISPATCH_MAX_PICKUP_RADIUS_KM", None)

    p = DispatchPolicy(
        distance_weight=_read_float(environ, "DISPATCH_DISTANCE_WEIGHT", defaults.distance_weight),
        default_reliability=_read_float(environ, "DISPATCH_DEFAULT_RELIABILITY", defaults.default_reliability),
        earth_radius_km=_read_float(environ, "DISPATCH_EARTH_RADIUS_KM", defaults.earth_radius_km),
        exclusive_drivers=_read_bool(environ, "DISPATCH_EXCLUSIVE_DRIVERS", defaults.exclusive_drivers),
        max_pickup_radius_km=radius,
        grid_cell_km=_read_float(environ, "DISPATCH_GRID_CELL_KM", defaults.grid_cell_km),
        pickup_minutes_per_km=_read_float(environ, "DISPATCH_PICKUP_MINUTES_PER_KM", defaults.pickup_minutes_per_km),
    )
    p.validate()
    return p


def _read_float(environ: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _read_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")
