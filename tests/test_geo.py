# =============================================================================
# tests/test_geo.py - Great-circle distance helpers
# =============================================================================

import math

import pytest

from snackspot.utils.geo import (
    METERS_PER_DEGREE,
    bounding_box,
    haversine_distance,
    validate_coordinates,
)

AUCKLAND = (-36.8485, 174.7633)
WELLINGTON = (-41.2865, 174.7762)


class TestHaversineDistance:
    """Tests for haversine_distance."""

    def test_same_point_is_zero(self):
        assert haversine_distance(*AUCKLAND, *AUCKLAND) == pytest.approx(0.0, abs=1e-6)

    def test_auckland_to_wellington(self):
        # Roughly 494 km as the crow flies
        distance = haversine_distance(*AUCKLAND, *WELLINGTON)
        assert 490_000 < distance < 500_000

    def test_symmetric(self):
        forward = haversine_distance(*AUCKLAND, *WELLINGTON)
        backward = haversine_distance(*WELLINGTON, *AUCKLAND)
        assert forward == pytest.approx(backward)

    def test_accepts_decimal_inputs(self):
        from decimal import Decimal
        distance = haversine_distance(Decimal("-36.8485"), Decimal("174.7633"), *WELLINGTON)
        assert distance == pytest.approx(haversine_distance(*AUCKLAND, *WELLINGTON))

    def test_one_degree_of_latitude(self):
        distance = haversine_distance(0.0, 0.0, 1.0, 0.0)
        assert distance == pytest.approx(111_195, rel=1e-3)


class TestBoundingBox:
    """Tests for bounding_box."""

    def test_box_contains_circle(self):
        lat, lng = AUCKLAND
        radius = 10_000
        min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius)

        # Points exactly radius meters due north/east must be inside the box
        north = lat + radius / 111_195
        assert min_lat <= north <= max_lat
        east = lng + radius / (111_195 * math.cos(math.radians(lat)))
        assert min_lng <= east <= max_lng

    def test_latitude_span_uses_meters_per_degree(self):
        min_lat, max_lat, _, _ = bounding_box(0.0, 0.0, METERS_PER_DEGREE)
        assert min_lat == pytest.approx(-1.0)
        assert max_lat == pytest.approx(1.0)

    def test_polar_search_skips_longitude_bounds(self):
        _, _, min_lng, max_lng = bounding_box(85.0, 10.0, 5_000)
        assert min_lng is None
        assert max_lng is None

    def test_antimeridian_skips_longitude_bounds(self):
        _, _, min_lng, max_lng = bounding_box(-17.0, 179.99, 10_000)
        assert min_lng is None
        assert max_lng is None


class TestValidateCoordinates:
    """Tests for validate_coordinates."""

    @pytest.mark.parametrize("lat,lng", [(0, 0), (-90, -180), (90, 180), AUCKLAND])
    def test_valid(self, lat, lng):
        assert validate_coordinates(lat, lng)

    @pytest.mark.parametrize("lat,lng", [
        (91, 0), (-90.0001, 0), (0, 180.5), (0, -181), (float("nan"), 0), ("abc", 0), (None, 0),
    ])
    def test_invalid(self, lat, lng):
        assert not validate_coordinates(lat, lng)
