"""
Purpose: Bounded candidate lookup for larger fleets.
What it does:
Buckets drivers into a uniform lat/lng grid so that a radius query only has to
look at the cells overlapping the search window instead of scanning the fleet.

Output order is always the snapshot order of the drivers, so callers that
break ties by "first seen" get the same answer as a plain linear scan.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

from .geodistance import EARTH_RADIUS_KM, GeoPoint, haversine_km

if TYPE_CHECKING:
    from drivers.models import Driver

CellKey = Tuple[int, int]


class DriverGridIndex:
    """
    Grid index over a driver snapshot.

    Cells are square in degrees; `cell_km` is their size along a meridian.
    Drivers with non-finite coordinates are never indexed.
    """

    def __init__(
        self,
        drivers: Sequence[Driver],
        cell_km: float = 2.0,
        radius_km: float = EARTH_RADIUS_KM,
    ):
        if cell_km <= 0:
            raise ValueError("cell_km must be > 0")

        self.radius_km = radius_km
        self.cell_deg = math.degrees(cell_km / radius_km)
        self._drivers = list(drivers)
        self._cells: Dict[CellKey, List[int]] = {}

        for position, driver in enumerate(self._drivers):
            lat, lng = driver.location
            if not (math.isfinite(lat) and math.isfinite(lng)):
                continue
            self._cells.setdefault(self._cell_of(lat, lng), []).append(position)

    def __len__(self) -> int:
        return len(self._drivers)

    def _cell_of(self, lat: float, lng: float) -> CellKey:
        return (math.floor(lat / self.cell_deg), math.floor(lng / self.cell_deg))

    def candidates_near(self, point: GeoPoint, radius_km: float) -> List[Driver]:
        """
        Drivers within `radius_km` (great-circle) of `point`, in snapshot order.
        """
        if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
            return []

        angular = radius_km / self.radius_km
        lat_rad = math.radians(point.lat)

        lat_lo = point.lat - math.degrees(angular)
        lat_hi = point.lat + math.degrees(angular)

        # Window reaching a pole or wrapping the antimeridian: use every cell
        if abs(lat_rad) + angular >= math.pi / 2:
            positions = self._all_positions()
        else:
            d_lng = math.degrees(math.asin(min(1.0, math.sin(angular) / math.cos(lat_rad))))
            lng_lo = point.lng - d_lng
            lng_hi = point.lng + d_lng
            if lng_lo < -180.0 or lng_hi > 180.0:
                positions = self._all_positions()
            else:
                positions = self._positions_in_window(lat_lo, lat_hi, lng_lo, lng_hi)

        found = []
        for position in sorted(positions):
            driver = self._drivers[position]
            if haversine_km(driver.location, point, self.radius_km) <= radius_km:
                found.append(driver)
        return found

    def _all_positions(self) -> List[int]:
        return [position for bucket in self._cells.values() for position in bucket]

    def _positions_in_window(self, lat_lo: float, lat_hi: float, lng_lo: float, lng_hi: float) -> List[int]:
        row_lo, col_lo = self._cell_of(lat_lo, lng_lo)
        row_hi, col_hi = self._cell_of(lat_hi, lng_hi)

        # Sparse fleets: walking the occupied cells is cheaper than the window
        if (row_hi - row_lo + 1) * (col_hi - col_lo + 1) > len(self._cells):
            return [
                position
                for (row, col), bucket in self._cells.items()
                if row_lo <= row <= row_hi and col_lo <= col <= col_hi
                for position in bucket
            ]

        positions: List[int] = []
        for row in range(row_lo, row_hi + 1):
            for col in range(col_lo, col_hi + 1):
                positions.extend(self._cells.get((row, col), ()))
        return positions
