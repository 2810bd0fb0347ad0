"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Times are minutes since midnight in the civil time zone.
"""

PRESENT_UNTIL_MINUTES = 9 * 60 + 10  # 09:10
LATE_UNTIL_MINUTES = 9 * 60 + 30  # 09:30
HALF_DAY_UNTIL_MINUTES = 13 * 60  # 13:00

HALF_DAY_CHECKOUT_BEFORE_MINUTES = 16 * 60  # 16:00
EARLY_LEAVE_BEFORE_MINUTES = 17 * 60 + 45  # 17:45
OFFICE_END_MINUTES = 18 * 60  # 18:00

SALARY_MONTH_DAYS = 30
LATES_PER_DEDUCTIBLE_DAY = 3

DEFAULT_TIMEZONE = "Asia/Karachi"
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_ABSENCE_WINDOW = 10
ABSENCE_WARNING_STREAK = 2
ABSENCE_DISCIPLINARY_STREAK = 3
DEFAULT_RETENTION_MONTHS = 6
DEFAULT_BATCH_SIZE = 100
