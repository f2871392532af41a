"""
Identifier & Collection Helpers

- Order numbers (ORD-YYYYMMDD-XXXXXX)
- URL slugs for restaurants, categories and products
- In-memory pagination

Order numbers are collision-resistant, not unique: two calls on the same
day can return the same suffix. The orders collection carries a unique
index on the number, and the caller retries with a fresh number when the
insert conflicts.
"""

import math
import random
import re
import string
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional

from mesob.constants import ORDER_NUMBER_PREFIX, ORDER_NUMBER_SUFFIX_LENGTH

BASE36_ALPHABET = string.digits + string.ascii_uppercase

# Seeded once per process
_rng = random.Random()


# =============================================================================
# ORDER NUMBERS
# =============================================================================

def generate_order_number(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate a human-friendly order number.

    Args:
        now: Date stamped into the number (default: today)
        rng: Random source for the suffix (default: process-wide PRNG)

    Returns:
        str: e.g. "ORD-20240128-K3X9QZ"
    """
    now = now or datetime.now()
    rng = rng or _rng
    suffix = "".join(rng.choices(BASE36_ALPHABET, k=ORDER_NUMBER_SUFFIX_LENGTH))
    return f"{ORDER_NUMBER_PREFIX}-{now:%Y%m%d}-{suffix}"


# =============================================================================
# SLUGS
# =============================================================================

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\-]+", re.ASCII)
_MULTI_HYPHEN = re.compile(r"-{2,}")


def slugify(text: Any) -> str:
    """
    Build a URL slug from free text.

    Example:
        >>> slugify("  Hello, World! ")
        'hello-world'
        >>> slugify("Mama's  Kitchen -- Downtown")
        'mamas-kitchen-downtown'
    """
    if text is None:
        return ""

    slug = str(text).lower().strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_WORD.sub("", slug)
    slug = _MULTI_HYPHEN.sub("-", slug)
    return slug.strip("-")


# =============================================================================
# PAGINATION
# =============================================================================

@dataclass
class Page:
    """
    One page of an in-memory collection.

    Attributes:
        data: Items on this page
        page: 1-based page number requested
        limit: Page size requested
        total_pages: Number of pages in the collection
        total_items: Number of items in the collection
    """
    data: list = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total_pages: int = 0
    total_items: int = 0

    def to_dict(self) -> dict:
        """Convert to the API's pagination envelope."""
        return {
            "data": self.data,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
        }


def paginate(items: Iterable[Any], page: int = 1, limit: int = 10) -> Page:
    """
    Slice a collection into a page.

    Pages past the end, and non-positive page or limit values, give an
    empty page rather than an error.

    Example:
        >>> paginate(list(range(1, 26)), page=3, limit=10).data
        [21, 22, 23, 24, 25]
    """
    items = list(items)
    total_items = len(items)
    total_pages = math.ceil(total_items / limit) if limit > 0 else 0

    if page < 1 or limit < 1:
        data = []
    else:
        start = (page - 1) * limit
        data = items[start:start + limit]

    return Page(
        data=data,
        page=page,
        limit=limit,
        total_pages=total_pages,
        total_items=total_items,
    )
