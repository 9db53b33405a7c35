#Marks routing as a package.
#Re-exports the distance math and the driver grid index so other modules
#import from routing without knowing internal file names.
#No business logic.

from .geodistance import EARTH_RADIUS_KM, GeoPoint, haversine_km
from .spatial_index import DriverGridIndex

__all__ = [
    "EARTH_RADIUS_KM",
    "GeoPoint",
    "haversine_km",
    "DriverGridIndex",
]
