"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_DAILY_THRESHOLD = Decimal("8.0")
# datetime.weekday() numbering: Monday=0 ... Sunday=6
DEFAULT_WEEK_STARTS_ON = 6
MINUTES_PER_HOUR = Decimal(60)
ZERO = Decimal(0)
