from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time

from ..common.datetime_utils import format_time


@dataclass(frozen=True)
class ShiftTemplate:
    """Named scheduled work window."""

    shift_id: str
    name: str
    start_time: time
    end_time: time
    grace_minutes: int = 0
    break_minutes: int = 0
    work_days: frozenset[int] = field(default_factory=lambda: frozenset({1, 2, 3, 4, 5}))

    @property
    def crosses_midnight(self) -> bool:
        return self.end_time <= self.start_time

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "name": self.name,
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "grace_minutes": self.grace_minutes,
            "break_minutes": self.break_minutes,
            "work_days": sorted(self.work_days),
        }
