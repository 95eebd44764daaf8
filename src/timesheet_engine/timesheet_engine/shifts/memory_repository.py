from __future__ import annotations

import threading
from typing import Mapping, Optional, Sequence

from .model import ShiftTemplate
from .repository import ShiftAssignmentRepository, ShiftRepository


class InMemoryShiftRepository(ShiftRepository):
    def __init__(self, shifts: Sequence[ShiftTemplate] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[str, ShiftTemplate] = {s.shift_id: s for s in shifts}

    def get(self, shift_id: str) -> Optional[ShiftTemplate]:
        return self._by_id.get(shift_id)

    def list_all(self) -> Sequence[ShiftTemplate]:
        with self._lock:
            return list(self._by_id.values())

    def upsert(self, shift: ShiftTemplate) -> None:
        with self._lock:
            self._by_id[shift.shift_id] = shift

    def delete(self, shift_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(shift_id, None) is not None


class InMemoryShiftAssignmentRepository(ShiftAssignmentRepository):
    def __init__(self, assignments: Optional[Mapping[str, str]] = None):
        self._lock = threading.Lock()
        self._shift_by_employee: dict[str, str] = dict(assignments or {})

    def get_shift_id(self, employee_id: str) -> Optional[str]:
        return self._shift_by_employee.get(employee_id)

    def assign(self, employee_id: str, shift_id: str) -> None:
        with self._lock:
            self._shift_by_employee[employee_id] = shift_id

    def unassign(self, employee_id: str) -> bool:
        with self._lock:
            return self._shift_by_employee.pop(employee_id, None) is not None

    def employees_for_shift(self, shift_id: str) -> Sequence[str]:
        with self._lock:
            return sorted(e for e, s in self._shift_by_employee.items() if s == shift_id)
