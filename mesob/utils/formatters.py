"""
Display Formatters

Locale-aware rendering of dates, money, distances and relative times for
the customer, restaurant and driver apps. Locale data comes from Babel
(CLDR); locales may be given as "en_US" or "en-US".

Malformed values never raise; they render as an empty string.
"""

import logging
import math
import re
from datetime import date, datetime
from typing import Optional, Union

from babel import Locale, UnknownLocaleError
from babel.dates import (
    format_date as babel_format_date,
    format_datetime as babel_format_datetime,
    get_date_format,
    get_datetime_format,
    get_time_format,
)
from babel.numbers import format_currency as babel_format_currency

from mesob.constants import DISTANCE_UNIT_THRESHOLD_METERS
from mesob.core.config import get_settings

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en_US"

DateLike = Union[datetime, date, str]

# Lone hour field outside quoted literals
_SINGLE_HOUR = re.compile(r"'[^']*'|(?<![hHkK])[hHkK](?![hHkK])")

# (seconds per unit, unit name), largest first
TIME_AGO_BUCKETS = (
    (31_536_000, "year"),
    (2_592_000, "month"),
    (86_400, "day"),
    (3_600, "hour"),
    (60, "minute"),
)


def _parse_locale(locale: Optional[str]) -> Locale:
    """Resolve a locale identifier; None means the configured default."""
    if not locale:
        locale = get_settings().default_locale
    try:
        return Locale.parse(str(locale).replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError):
        logger.warning(f"Unknown locale '{locale}', using {FALLBACK_LOCALE}")
        return Locale.parse(FALLBACK_LOCALE)


def _two_digit_hour(pattern: str) -> str:
    return _SINGLE_HOUR.sub(
        lambda m: m.group(0) if m.group(0).startswith("'") else m.group(0) * 2,
        pattern,
    )


def to_datetime(value: DateLike) -> Optional[datetime]:
    """
    Coerce a date-like value to a datetime.

    Accepts datetime, date and ISO-8601 strings (a trailing "Z" is read
    as UTC). Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def format_date(value: DateLike, locale: Optional[str] = None) -> str:
    """
    Format a date as a long, readable string.

    Example:
        >>> format_date("2024-01-28")
        'January 28, 2024'
    """
    dt = to_datetime(value)
    if dt is None:
        return ""
    return babel_format_date(dt.date(), format="long", locale=_parse_locale(locale))


def format_date_time(value: DateLike, locale: Optional[str] = None) -> str:
    """
    Format a date with its time of day.

    Combines the locale's long date pattern with its short time pattern,
    padded to a two-digit hour, the way the locale joins them
    (en_US: "January 28, 2024, 03:05 PM").
    """
    dt = to_datetime(value)
    if dt is None:
        return ""

    loc = _parse_locale(locale)
    pattern = (
        get_datetime_format("long", locale=loc)
        .replace("{1}", get_date_format("long", locale=loc).pattern)
        .replace("{0}", _two_digit_hour(get_time_format("short", locale=loc).pattern))
    )
    # Aware values are shown in their own zone
    return babel_format_datetime(
        dt.replace(tzinfo=None), format=pattern, locale=loc
    )


def format_currency(
    amount: float,
    currency: Optional[str] = None,
    locale: Optional[str] = None,
) -> str:
    """
    Format an amount of money.

    Currency and locale default to the configured ones.

    Example:
        >>> format_currency(1234.5)
        '$1,234.50'
    """
    try:
        number = float(amount)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(number):
        return ""

    currency = currency or get_settings().default_currency
    try:
        return babel_format_currency(
            number, str(currency).upper(), locale=_parse_locale(locale)
        )
    except (ValueError, TypeError) as e:
        logger.warning(f"Could not format {amount!r} as {currency!r}: {e}")
        return ""


def format_distance(meters: float) -> str:
    """
    Format a distance, switching from meters to kilometers at 1 km.

    Example:
        >>> format_distance(850)
        '850 m'
        >>> format_distance(3250)
        '3.2 km'
    """
    try:
        value = float(meters)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(value):
        return ""

    if value < DISTANCE_UNIT_THRESHOLD_METERS:
        return f"{math.floor(value + 0.5)} m"
    return f"{value / 1000:.1f} km"


def time_ago(value: DateLike, now: Optional[datetime] = None) -> str:
    """
    Relative time between a past moment and now.

    Picks the largest of year/month/day/hour/minute of which more than one
    has elapsed, otherwise counts seconds. Future moments count as zero.

    Args:
        value: The past moment
        now: Reference time (defaults to the current time, in the
            same timezone awareness as value)

    Returns:
        str: e.g. "3 hours ago", "1 day ago" ("" if value is malformed)
    """
    then = to_datetime(value)
    if then is None:
        return ""

    if now is None:
        now = datetime.now(then.tzinfo) if then.tzinfo else datetime.now()
    elif (now.tzinfo is None) != (then.tzinfo is None):
        # Mixed awareness: compare wall-clock values
        now = now.replace(tzinfo=None)
        then = then.replace(tzinfo=None)

    seconds = max(math.floor((now - then).total_seconds()), 0)

    for unit_seconds, unit in TIME_AGO_BUCKETS:
        interval = seconds / unit_seconds
        if interval > 1:
            return _ago(math.floor(interval), unit)

    return _ago(seconds, "second")


def _ago(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"
