"""
Geo / Delivery Time Estimation

Great-circle distance between two coordinates and a linear delivery-time
estimate built on top of it.

Use Cases:
    - Distance between restaurant and customer address
    - Delivery time shown at checkout
    - Driver-to-restaurant proximity

All functions are pure and never raise: inputs that are not finite numbers
produce a 0.0 distance.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from mesob.constants import EARTH_RADIUS_METERS
from mesob.utils.formatters import format_distance

logger = logging.getLogger(__name__)

DEFAULT_SPEED_KMH = 30.0
DEFAULT_PREPARATION_MINUTES = 15


@dataclass
class DeliveryEstimate:
    """
    Result of a delivery estimate between two points.

    Attributes:
        distance_meters: Great-circle distance
        travel_minutes: Courier travel time, rounded up
        preparation_minutes: Kitchen preparation time
        total_minutes: travel_minutes + preparation_minutes
        formatted_distance: Human readable distance ("850 m", "3.2 km")
    """
    distance_meters: float
    travel_minutes: int
    preparation_minutes: int
    total_minutes: int
    formatted_distance: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "distance_meters": self.distance_meters,
            "travel_minutes": self.travel_minutes,
            "preparation_minutes": self.preparation_minutes,
            "total_minutes": self.total_minutes,
            "formatted_distance": self.formatted_distance,
        }


def _finite(value: Any) -> Optional[float]:
    """Coerce to a finite float, or None."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _preparation(value: Any) -> int:
    """Whole preparation minutes; unusable values mean the default."""
    minutes = _finite(value)
    if minutes is None:
        return DEFAULT_PREPARATION_MINUTES
    return int(minutes)


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Distance in meters between two points using the Haversine formula.

    Args:
        lat1: Latitude of the first point, in degrees
        lon1: Longitude of the first point, in degrees
        lat2: Latitude of the second point, in degrees
        lon2: Longitude of the second point, in degrees

    Returns:
        float: Distance in meters (0.0 for non-numeric input)

    Example:
        >>> calculate_distance(40.7128, -74.0060, 40.7128, -74.0060)
        0.0
    """
    coords = [_finite(v) for v in (lat1, lon1, lat2, lon2)]
    if any(c is None for c in coords):
        return 0.0
    lat1, lon1, lat2, lon2 = coords

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    # Differences in radians; subtracting huge degree values overflows
    d_phi = phi2 - phi1
    d_lambda = math.radians(lon2) - math.radians(lon1)

    a = (
        math.sin(d_phi / 2) * math.sin(d_phi / 2)
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) * math.sin(d_lambda / 2)
    )
    # Rounding can push `a` slightly outside [0, 1]
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def calculate_delivery_time(
    distance_meters: float,
    preparation_minutes: int = DEFAULT_PREPARATION_MINUTES,
    *,
    speed_kmh: float = DEFAULT_SPEED_KMH,
) -> int:
    """
    Estimated delivery time in minutes.

    Travel time assumes a constant courier speed and is rounded up to the
    next whole minute before the preparation time is added.

    Args:
        distance_meters: Distance to cover
        preparation_minutes: Food preparation time
        speed_kmh: Average travel speed

    Returns:
        int: Total minutes, never less than preparation_minutes
    """
    preparation = _preparation(preparation_minutes)
    distance = _finite(distance_meters)
    speed = _finite(speed_kmh)
    if distance is None or distance <= 0 or speed is None or speed <= 0:
        return preparation

    speed_m_per_min = speed * 1000 / 60
    return preparation + math.ceil(distance / speed_m_per_min)


def estimate_delivery(
    origin_lat: float,
    origin_lng: float,
    dest_lat: float,
    dest_lng: float,
    preparation_minutes: int = DEFAULT_PREPARATION_MINUTES,
    *,
    speed_kmh: float = DEFAULT_SPEED_KMH,
) -> DeliveryEstimate:
    """
    Distance and delivery time between a restaurant and a customer.

    Args:
        origin_lat: Origin latitude (restaurant location)
        origin_lng: Origin longitude
        dest_lat: Destination latitude (customer)
        dest_lng: Destination longitude
        preparation_minutes: Food preparation time
        speed_kmh: Average travel speed

    Returns:
        DeliveryEstimate: Distance and time breakdown
    """
    distance = calculate_distance(origin_lat, origin_lng, dest_lat, dest_lng)
    total = calculate_delivery_time(distance, preparation_minutes, speed_kmh=speed_kmh)
    preparation = _preparation(preparation_minutes)

    logger.debug(f"Delivery estimate: {distance:.0f} m, {total} min total")

    return DeliveryEstimate(
        distance_meters=round(distance, 2),
        travel_minutes=total - preparation,
        preparation_minutes=preparation,
        total_minutes=total,
        formatted_distance=format_distance(distance),
    )
