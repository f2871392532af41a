"""
Loyalty Tier Calculations

Customers move up tiers as lifetime points accumulate; redeeming points
never lowers a tier. These helpers back the loyalty dashboard's tier badge
and progress bar.
"""

from dataclasses import dataclass
from typing import Optional

from mesob.constants import TIER_THRESHOLDS, LoyaltyTier

# Tiers ordered by threshold, lowest first
_TIERS = sorted(TIER_THRESHOLDS, key=TIER_THRESHOLDS.get)


@dataclass
class TierSummary:
    """Tier standing for a lifetime points balance."""
    lifetime_points: int
    tier: LoyaltyTier
    next_tier: Optional[LoyaltyTier]
    points_to_next_tier: int
    progress: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "lifetime_points": self.lifetime_points,
            "tier": self.tier.value,
            "next_tier": self.next_tier.value if self.next_tier else None,
            "points_to_next_tier": self.points_to_next_tier,
            "progress": self.progress,
        }


def calculate_tier(lifetime_points: int) -> LoyaltyTier:
    """Highest tier whose threshold the points reach."""
    current = _TIERS[0]
    for tier in _TIERS:
        if lifetime_points >= TIER_THRESHOLDS[tier]:
            current = tier
    return current


def next_tier(lifetime_points: int) -> Optional[LoyaltyTier]:
    """First tier above the points, or None at the top tier."""
    points = max(lifetime_points, 0)
    for tier in _TIERS:
        if TIER_THRESHOLDS[tier] > points:
            return tier
    return None


def points_to_next_tier(lifetime_points: int) -> int:
    """Points still needed for the next tier (0 at the top tier)."""
    upcoming = next_tier(lifetime_points)
    if upcoming is None:
        return 0
    return TIER_THRESHOLDS[upcoming] - max(lifetime_points, 0)


def tier_progress(lifetime_points: int) -> float:
    """
    Percentage of the way from the current tier to the next.

    Clamped to [0, 100]; the top tier reports 100.

    Example:
        >>> tier_progress(1000)
        50.0
    """
    upcoming = next_tier(lifetime_points)
    if upcoming is None:
        return 100.0

    floor = TIER_THRESHOLDS[calculate_tier(lifetime_points)]
    ceiling = TIER_THRESHOLDS[upcoming]
    progress = (lifetime_points - floor) / (ceiling - floor) * 100
    return min(max(progress, 0.0), 100.0)


def tier_summary(lifetime_points: int) -> TierSummary:
    """Everything the loyalty dashboard shows for a balance."""
    upcoming = next_tier(lifetime_points)
    return TierSummary(
        lifetime_points=lifetime_points,
        tier=calculate_tier(lifetime_points),
        next_tier=upcoming,
        points_to_next_tier=points_to_next_tier(lifetime_points),
        progress=round(tier_progress(lifetime_points), 1),
    )
