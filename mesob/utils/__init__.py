"""
                        Utilities Module

Stateless helpers shared by the marketplace services.

Modules:
    - geo: Haversine distance and delivery time estimates
    - helpers: Order numbers, slugs and pagination
    - formatters: Locale-aware display strings
    - validators: Email/phone/password/ObjectId checks
    - loyalty: Loyalty tier standing
"""

from mesob.utils.formatters import (
    format_currency,
    format_date,
    format_date_time,
    format_distance,
    time_ago,
)
from mesob.utils.geo import (
    DeliveryEstimate,
    calculate_delivery_time,
    calculate_distance,
    estimate_delivery,
)
from mesob.utils.helpers import Page, generate_order_number, paginate, slugify
from mesob.utils.loyalty import (
    TierSummary,
    calculate_tier,
    next_tier,
    points_to_next_tier,
    tier_progress,
    tier_summary,
)
from mesob.utils.validators import (
    PasswordValidation,
    is_valid_email,
    is_valid_object_id,
    is_valid_phone,
    sanitize_string,
    validate_password,
)

__all__ = [
    "calculate_distance",
    "calculate_delivery_time",
    "estimate_delivery",
    "DeliveryEstimate",
    "generate_order_number",
    "slugify",
    "paginate",
    "Page",
    "format_date",
    "format_date_time",
    "format_currency",
    "format_distance",
    "time_ago",
    "is_valid_email",
    "is_valid_phone",
    "validate_password",
    "is_valid_object_id",
    "sanitize_string",
    "PasswordValidation",
    "calculate_tier",
    "next_tier",
    "points_to_next_tier",
    "tier_progress",
    "tier_summary",
    "TierSummary",
]
