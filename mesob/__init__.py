"""
                Mesob Food Ordering - Shared Utilities

Stateless helpers shared by the marketplace services: delivery distance
and time estimation, order numbers and slugs, pagination, locale-aware
formatting, input validation and loyalty tiers.

Author: Mesob Platform Team
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Mesob Platform Team"
