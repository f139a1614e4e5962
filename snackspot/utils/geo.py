"""Great-circle distance helpers for the nearby search."""

import math

# Mean Earth radius (IUGG), meters
EARTH_RADIUS_M = 6371008.8

# Slightly under the true meridian length of a degree (~111 195 m), so a box
# built from it always contains the haversine circle.
METERS_PER_DEGREE = 111000.0

# Above this latitude the longitude span of the box degenerates.
POLAR_CUTOFF_DEGREES = 80.0


def haversine_distance(lat1, lng1, lat2, lng2):
    """Distance in meters between two (lat, lng) points given in degrees."""
    phi1 = math.radians(float(lat1))
    phi2 = math.radians(float(lat2))
    d_phi = phi2 - phi1
    d_lambda = math.radians(float(lng2) - float(lng1))

    a = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))
    return EARTH_RADIUS_M * c


def bounding_box(lat, lng, radius):
    """Return (min_lat, max_lat, min_lng, max_lng) enclosing the search circle.

    The longitude bounds are None when they cannot be expressed as a single
    interval: near the poles or when the box would cross the antimeridian.
    """
    lat = float(lat)
    lng = float(lng)
    lat_range = radius / METERS_PER_DEGREE
    min_lat = max(-90.0, lat - lat_range)
    max_lat = min(90.0, lat + lat_range)

    if max(abs(min_lat), abs(max_lat)) >= POLAR_CUTOFF_DEGREES:
        return min_lat, max_lat, None, None

    # Widest point of the circle is on the edge nearer the pole.
    widest_lat = max(abs(min_lat), abs(max_lat))
    lng_range = radius / (METERS_PER_DEGREE * math.cos(math.radians(widest_lat)))
    min_lng = lng - lng_range
    max_lng = lng + lng_range
    if min_lng < -180.0 or max_lng > 180.0:
        return min_lat, max_lat, None, None

    return min_lat, max_lat, min_lng, max_lng


def validate_coordinates(lat, lng):
    """True when lat/lng are finite and inside their valid ranges."""
    try:
        lat = float(lat)
        lng = float(lng)
    except (TypeError, ValueError):
        return False
    if math.isnan(lat) or math.isnan(lng):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0
