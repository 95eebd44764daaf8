from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """One employee-day from the attendance log (read only)."""

    employee_id: str
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus = AttendanceStatus.PRESENT

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_id, self.work_date)


@dataclass(frozen=True)
class Employee:
    """Directory view needed for eligibility."""

    employee_id: str
    active: bool = True
