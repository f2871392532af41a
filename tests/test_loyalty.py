"""
Tests for mesob.utils.loyalty

Thresholds: bronze 0, silver 500, gold 1500, platinum 5000.
"""

import pytest

from mesob.constants import LoyaltyTier
from mesob.utils.loyalty import (
    calculate_tier,
    next_tier,
    points_to_next_tier,
    tier_progress,
    tier_summary,
)


class TestCalculateTier:

    @pytest.mark.parametrize(
        "points,tier",
        [
            (0, LoyaltyTier.BRONZE),
            (499, LoyaltyTier.BRONZE),
            (500, LoyaltyTier.SILVER),
            (1499, LoyaltyTier.SILVER),
            (1500, LoyaltyTier.GOLD),
            (5000, LoyaltyTier.PLATINUM),
            (250_000, LoyaltyTier.PLATINUM),
            (-10, LoyaltyTier.BRONZE),
        ],
    )
    def test_thresholds(self, points: int, tier: LoyaltyTier) -> None:
        assert calculate_tier(points) is tier


class TestNextTier:

    def test_next(self) -> None:
        assert next_tier(0) is LoyaltyTier.SILVER
        assert next_tier(500) is LoyaltyTier.GOLD
        assert next_tier(4999) is LoyaltyTier.PLATINUM

    def test_top_tier_has_none(self) -> None:
        assert next_tier(5000) is None

    def test_points_to_next(self) -> None:
        assert points_to_next_tier(0) == 500
        assert points_to_next_tier(1000) == 500
        assert points_to_next_tier(4999) == 1
        assert points_to_next_tier(6000) == 0

    def test_points_to_next_clamps_negative_balance(self) -> None:
        assert points_to_next_tier(-10) == 500


class TestTierProgress:

    @pytest.mark.parametrize(
        "points,expected",
        [
            (0, 0.0),
            (250, 50.0),
            (500, 0.0),
            (1000, 50.0),
            (3250, 50.0),
            (5000, 100.0),
            (9000, 100.0),
        ],
    )
    def test_progress(self, points: int, expected: float) -> None:
        assert tier_progress(points) == pytest.approx(expected)

    def test_negative_points_clamped(self) -> None:
        assert tier_progress(-100) == 0.0


class TestTierSummary:

    def test_summary(self) -> None:
        assert tier_summary(1000).to_dict() == {
            "lifetime_points": 1000,
            "tier": "silver",
            "next_tier": "gold",
            "points_to_next_tier": 500,
            "progress": 50.0,
        }

    def test_top_tier_summary(self) -> None:
        summary = tier_summary(7500)
        assert summary.tier is LoyaltyTier.PLATINUM
        assert summary.next_tier is None
        assert summary.to_dict()["next_tier"] is None
        assert summary.progress == 100.0
