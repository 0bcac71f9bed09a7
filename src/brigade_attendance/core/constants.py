"""Constants and defaults.

Note: Policy values here are only fallbacks; settings modules override them.
"""

DEFAULT_COMP_DAY_THRESHOLD_HOURS = "3.15"
DEFAULT_VACATION_ANNUAL_QUOTA = 22
DEFAULT_PERSONAL_ANNUAL_QUOTA = 7

DEFAULT_ENTRY_TIME = "08:00"
DEFAULT_EXIT_TIME = "15:00"
DEFAULT_OUTING_DEPARTURE = "15:00"
DEFAULT_OUTING_RETURN = "08:00"

REQUEST_LIST_LIMITS = (10, 20, 30)
DEFAULT_HISTORY_LIMIT = 30
MIN_PASSWORD_LENGTH = 6
