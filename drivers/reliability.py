"""
Purpose: Per-driver historical performance lookup.
What it does:
Resolves a driver's reliability score from the table supplied with the
snapshot, falling back to a policy default for unscored drivers.
"""

from __future__ import annotations

from typing import Mapping, Optional

# driver_id -> unitless score, higher is better. None means "not scored".
ReliabilityTable = Mapping[str, Optional[float]]


def reliability_for(table: Optional[ReliabilityTable], driver_id: str, default: float) -> float:
    """
    Returns the driver's reliability, or `default` when the driver is absent
    from the table or explicitly null.
    """
    if not table:
        return default

    value = table.get(driver_id)
    if value is None:
        return default
    return float(value)
