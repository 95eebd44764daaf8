"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_RULE_SET_ID = "RS-DEFAULT"

DEFAULT_SHIFT_START = "08:00"
DEFAULT_SHIFT_END = "17:00"
DEFAULT_BREAK_MINUTES = 60

RULE_SET_ID_PREFIX = "RS"
SHIFT_ID_PREFIX = "SHIFT"
TIMESHEET_ID_PREFIX = "TS"
DEFAULT_SHIFT_ID = "SHIFT-DEFAULT"

# Display multipliers on timesheet segments (payroll applies the real rates)
REGULAR_MULTIPLIER = 1.0
OVERTIME_MULTIPLIER = 1.25
NIGHT_DIFF_MULTIPLIER = 1.1
