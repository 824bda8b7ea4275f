"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

VIEW_BUCKET_SIZE = 1000
DEFAULT_TAX_RATE = Decimal("0.05")

DEFAULT_PAYROLL_RUN_DAY = 25
DEFAULT_PAYROLL_RUN_HOUR = 9

MIN_PERIOD_YEAR = 1970
MAX_PERIOD_YEAR = 9999

DEFAULT_PAYROLL_LIST_LIMIT = 500
