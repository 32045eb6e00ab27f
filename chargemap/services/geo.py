"""
Great-circle geometry helpers.

Pure functions over (latitude, longitude) pairs in degrees; distances in
kilometres.
"""
import math
from typing import Tuple

# Mean Earth radius in kilometres
EARTH_RADIUS_KM = 6371.0


def haversine_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Calculate the great-circle distance between two points using the Haversine formula."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (math.sin(delta_phi / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    # Rounding can push a slightly above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.asin(math.sqrt(a))

    return earth_radius_km * c


def latitude_band(
    latitude: float,
    radius_km: float,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> Tuple[float, float]:
    """
    Return the (min, max) latitude any point within radius_km can have.

    The great-circle distance between two points is never shorter than the
    meridian arc between their latitudes, so this band is a safe pre-filter.
    """
    # Slack so float rounding never drops a row sitting on the boundary
    delta = math.degrees(radius_km / earth_radius_km) + 1e-9
    return max(-90.0, latitude - delta), min(90.0, latitude + delta)
