"""
Shared Constants

Enumerations and fixed values used across the marketplace services.
All enums subclass ``str`` so they serialize directly to JSON.
"""

import enum

APP_NAME = "Mesob Food Ordering"

# Mean Earth radius used by the Haversine distance
EARTH_RADIUS_METERS = 6_371_000

# Below this, distances are shown in meters rather than kilometers
DISTANCE_UNIT_THRESHOLD_METERS = 1000

ORDER_NUMBER_PREFIX = "ORD"
ORDER_NUMBER_SUFFIX_LENGTH = 6


class UserRole(str, enum.Enum):
    """Account roles."""
    CUSTOMER = "customer"
    RESTAURANT = "restaurant"
    DRIVER = "driver"
    ADMIN = "admin"


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    PICKED_UP = "picked_up"
    ON_THE_WAY = "on_the_way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, enum.Enum):
    CARD = "card"
    WALLET = "wallet"
    CASH = "cash"


class LoyaltyTier(str, enum.Enum):
    """Loyalty tiers, lowest first."""
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


# Lifetime points needed to reach each tier
TIER_THRESHOLDS: dict[LoyaltyTier, int] = {
    LoyaltyTier.BRONZE: 0,
    LoyaltyTier.SILVER: 500,
    LoyaltyTier.GOLD: 1500,
    LoyaltyTier.PLATINUM: 5000,
}
