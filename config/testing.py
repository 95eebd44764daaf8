DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

# Tests seed their own stores.
SEED_PATH = ""

DEFAULT_RULE_SET = {
    "name": "Standard PH Rule Set",
    "standard_hours_per_day": 8,
    "grace_minutes": 10,
    "rounding_policy": "nearest_15",
    "overtime_requires_approval": True,
    "night_diff_start": "22:00",
    "night_diff_end": "06:00",
    "holiday_multiplier": 2.0,
}

DEFAULT_SHIFT = {
    "name": "Default",
    "start_time": "08:00",
    "end_time": "17:00",
    "break_minutes": 60,
}
