from __future__ import annotations

import threading
from typing import Iterable, Optional, Sequence

from .model import AttendanceEvent, Employee
from .repository import AttendanceLog, EmployeeDirectory


class InMemoryAttendanceLog(AttendanceLog):
    def __init__(self, events: Iterable[AttendanceEvent] = ()):
        self._lock = threading.Lock()
        self._events: list[AttendanceEvent] = list(events)

    def add_event(self, event: AttendanceEvent) -> None:
        with self._lock:
            self._events.append(event)

    def get_attendance_events(self) -> Sequence[AttendanceEvent]:
        with self._lock:
            return list(self._events)


class InMemoryEmployeeDirectory(EmployeeDirectory):
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}

    def add_employee(self, employee: Employee) -> None:
        self._by_id[employee.employee_id] = employee

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)
