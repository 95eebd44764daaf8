from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import format_time
from ..core.enums import RoundingPolicy


@dataclass(frozen=True)
class AttendanceRuleSet:
    """Named policy turning raw check-in/out times into payable hour buckets."""

    rule_set_id: str
    name: str
    standard_hours_per_day: float
    grace_minutes: int
    rounding_policy: RoundingPolicy
    overtime_requires_approval: bool
    night_diff_start: Optional[time]
    night_diff_end: Optional[time]
    holiday_multiplier: float = 1.0
    archived: bool = False

    @property
    def standard_minutes(self) -> int:
        return int(round(self.standard_hours_per_day * 60))

    @property
    def has_night_window(self) -> bool:
        return (
            self.night_diff_start is not None
            and self.night_diff_end is not None
            and self.night_diff_start != self.night_diff_end
        )

    def to_dict(self) -> dict:
        return {
            "id": self.rule_set_id,
            "name": self.name,
            "standard_hours_per_day": self.standard_hours_per_day,
            "grace_minutes": self.grace_minutes,
            "rounding_policy": self.rounding_policy.value,
            "overtime_requires_approval": self.overtime_requires_approval,
            "night_diff_start": format_time(self.night_diff_start),
            "night_diff_end": format_time(self.night_diff_end),
            "holiday_multiplier": self.holiday_multiplier,
            "archived": self.archived,
        }
