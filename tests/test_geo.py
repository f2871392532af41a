"""
Tests for mesob.utils.geo

Covers:
1. Haversine distance (identity, symmetry, known distances)
2. Total behaviour on out-of-range and non-numeric input
3. Delivery time estimates
"""

import math

import pytest

from mesob.constants import EARTH_RADIUS_METERS
from mesob.utils.geo import (
    DeliveryEstimate,
    calculate_delivery_time,
    calculate_distance,
    estimate_delivery,
)

NYC = (40.7128, -74.0060)
TIMES_SQUARE = (40.7580, -73.9855)


# =============================================================================
# DISTANCE
# =============================================================================


class TestCalculateDistance:
    """Haversine distance in meters"""

    def test_same_point_is_zero(self) -> None:
        assert calculate_distance(*NYC, *NYC) == 0.0

    def test_symmetric(self) -> None:
        forward = calculate_distance(*NYC, *TIMES_SQUARE)
        backward = calculate_distance(*TIMES_SQUARE, *NYC)
        assert forward == pytest.approx(backward, rel=1e-12)

    def test_one_degree_of_latitude(self) -> None:
        expected = EARTH_RADIUS_METERS * math.pi / 180
        assert calculate_distance(0, 0, 1, 0) == pytest.approx(expected, rel=1e-9)

    def test_antipodal_points(self) -> None:
        expected = EARTH_RADIUS_METERS * math.pi
        assert calculate_distance(0, 0, 0, 180) == pytest.approx(expected, rel=1e-9)

    def test_city_distance_in_expected_range(self) -> None:
        """Lower Manhattan to Times Square is a little over 5 km"""
        distance = calculate_distance(*NYC, *TIMES_SQUARE)
        assert 5000 < distance < 5600

    def test_out_of_range_coordinates_are_finite(self) -> None:
        distance = calculate_distance(500, -720, -300, 1000)
        assert math.isfinite(distance)
        assert distance >= 0

    def test_huge_coordinates_do_not_overflow(self) -> None:
        distance = calculate_distance(1e308, 0, -1e308, 0)
        assert math.isfinite(distance)
        assert 0 <= distance <= EARTH_RADIUS_METERS * math.pi

    @pytest.mark.parametrize(
        "bad",
        [float("nan"), float("inf"), None, "north", object()],
    )
    def test_non_numeric_input_gives_zero(self, bad) -> None:
        assert calculate_distance(bad, 0, 1, 1) == 0.0

    def test_numeric_strings_are_accepted(self) -> None:
        assert calculate_distance("0", "0", "1", "0") == pytest.approx(
            calculate_distance(0, 0, 1, 0)
        )


# =============================================================================
# DELIVERY TIME
# =============================================================================


class TestCalculateDeliveryTime:
    """30 km/h is 500 m per minute"""

    @pytest.mark.parametrize("prep", [0, 5, 15, 45])
    def test_zero_distance_is_prep_time(self, prep: int) -> None:
        assert calculate_delivery_time(0, prep) == prep

    def test_default_prep_time(self) -> None:
        assert calculate_delivery_time(0) == 15

    def test_travel_rounds_up(self) -> None:
        assert calculate_delivery_time(500) == 16
        assert calculate_delivery_time(501) == 17
        assert calculate_delivery_time(1000) == 17

    def test_returns_int(self) -> None:
        assert isinstance(calculate_delivery_time(1234.5, 10), int)

    def test_never_below_prep_time(self) -> None:
        assert calculate_delivery_time(-2000, 20) == 20
        assert calculate_delivery_time(float("nan"), 20) == 20

    def test_custom_speed(self) -> None:
        # 60 km/h = 1000 m/min
        assert calculate_delivery_time(3000, 10, speed_kmh=60) == 13

    def test_non_positive_speed_ignores_travel(self) -> None:
        assert calculate_delivery_time(3000, 10, speed_kmh=0) == 10

    @pytest.mark.parametrize("prep", [float("nan"), None, "soon"])
    def test_unusable_prep_time_uses_default(self, prep) -> None:
        assert calculate_delivery_time(1000, prep) == 17


class TestEstimateDelivery:
    """Combined distance + time estimate"""

    def test_same_point(self) -> None:
        estimate = estimate_delivery(*NYC, *NYC, 20)
        assert isinstance(estimate, DeliveryEstimate)
        assert estimate.distance_meters == 0.0
        assert estimate.travel_minutes == 0
        assert estimate.total_minutes == 20
        assert estimate.formatted_distance == "0 m"

    def test_breakdown_adds_up(self) -> None:
        estimate = estimate_delivery(*NYC, *TIMES_SQUARE)
        assert estimate.preparation_minutes == 15
        assert estimate.total_minutes == estimate.preparation_minutes + estimate.travel_minutes
        assert estimate.travel_minutes == math.ceil(
            calculate_distance(*NYC, *TIMES_SQUARE) / 500
        )
        assert estimate.formatted_distance.endswith(" km")

    def test_missing_prep_time_uses_default(self) -> None:
        estimate = estimate_delivery(*NYC, *NYC, preparation_minutes=None)
        assert estimate.preparation_minutes == 15
        assert estimate.total_minutes == 15

    def test_to_dict(self) -> None:
        data = estimate_delivery(*NYC, *NYC, 10).to_dict()
        assert data == {
            "distance_meters": 0.0,
            "travel_minutes": 0,
            "preparation_minutes": 10,
            "total_minutes": 10,
            "formatted_distance": "0 m",
        }
