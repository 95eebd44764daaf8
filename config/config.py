import os


class Config:
    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Optional JSON seed (rule sets, shifts, assignments, employees, attendance events)
    SEED_PATH = os.environ.get("SEED_PATH", "")

    # Rule set RS-DEFAULT, always present
    DEFAULT_RULE_SET = {
        "name": os.environ.get("DEFAULT_RULE_SET_NAME", "Standard PH Rule Set"),
        "standard_hours_per_day": float(os.environ.get("STANDARD_HOURS_PER_DAY", "8")),
        "grace_minutes": int(os.environ.get("GRACE_MINUTES", "10")),
        "rounding_policy": os.environ.get("ROUNDING_POLICY", "nearest_15"),
        "overtime_requires_approval": bool(int(os.environ.get("OVERTIME_REQUIRES_APPROVAL", "1"))),
        "night_diff_start": os.environ.get("NIGHT_DIFF_START", "22:00"),
        "night_diff_end": os.environ.get("NIGHT_DIFF_END", "06:00"),
        "holiday_multiplier": float(os.environ.get("HOLIDAY_MULTIPLIER", "2.0")),
    }

    # Window used when an employee has no shift assignment
    DEFAULT_SHIFT = {
        "name": "Default",
        "start_time": os.environ.get("DEFAULT_SHIFT_START", "08:00"),
        "end_time": os.environ.get("DEFAULT_SHIFT_END", "17:00"),
        "break_minutes": int(os.environ.get("DEFAULT_BREAK_MINUTES", "60")),
    }
