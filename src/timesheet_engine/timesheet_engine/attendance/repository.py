from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent, Employee


class AttendanceLog(Protocol):
    """Attendance capture collaborator; this engine only reads it."""

    def get_attendance_events(self) -> Sequence[AttendanceEvent]:
        raise NotImplementedError


class EmployeeDirectory(Protocol):
    def get_employee(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError
