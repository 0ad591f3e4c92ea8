"""
Geodesic helpers.

Great-circle distance on a spherical Earth and flat-plane averaging of
coordinates. Inputs are assumed to be valid Coordinates; bounds are checked
by the schema layer, not here.
"""

import math
from typing import Iterable

from straymap.core.exceptions import EmptySightingsError
from straymap.schemas.geo import Coordinates

EARTH_RADIUS_METERS = 6_371_000.0


def distance(a: Coordinates, b: Coordinates) -> float:
    """Return the haversine distance in meters between two coordinates."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = phi2 - phi1
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    # clamp against floating point drift near antipodes
    h = min(1.0, max(0.0, h))
    return 2.0 * EARTH_RADIUS_METERS * math.asin(math.sqrt(h))


def mean_coordinates(points: Iterable[Coordinates]) -> Coordinates:
    """
    Arithmetic mean of latitudes and longitudes.

    This is not a spherical centroid. At roaming scales (tens of meters to a
    few kilometers) the difference is negligible.

    Raises:
        EmptySightingsError: If no points are given
    """
    count = 0
    lat_sum = 0.0
    lon_sum = 0.0
    for point in points:
        lat_sum += point.latitude
        lon_sum += point.longitude
        count += 1

    if count == 0:
        raise EmptySightingsError("Cannot compute a center of zero sightings")

    return Coordinates(latitude=lat_sum / count, longitude=lon_sum / count)
