from __future__ import annotations

import threading
from datetime import date
from typing import Optional, Sequence

from ..core.enums import TimesheetStatus
from .model import Timesheet
from .repository import TimesheetRepository


class InMemoryTimesheetRepository(TimesheetRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[str, Timesheet] = {}
        self._id_by_key: dict[tuple[str, date], str] = {}

    def get(self, timesheet_id: str) -> Optional[Timesheet]:
        return self._by_id.get(timesheet_id)

    def get_for_key(self, employee_id: str, work_date: date) -> Optional[Timesheet]:
        with self._lock:
            timesheet_id = self._id_by_key.get((employee_id, work_date))
            return self._by_id.get(timesheet_id) if timesheet_id else None

    def list_all(self, *, include_superseded: bool = False) -> Sequence[Timesheet]:
        with self._lock:
            items = [t for t in self._by_id.values() if include_superseded or not t.superseded]
        items.sort(key=lambda t: (t.work_date, t.employee_id, t.computed_at))
        return items

    def list_by_status(self, status: TimesheetStatus) -> Sequence[Timesheet]:
        return [t for t in self.list_all() if t.status == status]

    def list_keys(self) -> dict[tuple[str, date], TimesheetStatus]:
        with self._lock:
            return {key: self._by_id[tid].status for key, tid in self._id_by_key.items()}

    def add(self, timesheet: Timesheet) -> None:
        with self._lock:
            if timesheet.key in self._id_by_key:
                raise ValueError(f"Key {timesheet.key!r} already holds a timesheet")
            self._by_id[timesheet.timesheet_id] = timesheet
            self._id_by_key[timesheet.key] = timesheet.timesheet_id

    def replace(self, timesheet: Timesheet) -> None:
        with self._lock:
            if timesheet.timesheet_id not in self._by_id:
                raise KeyError(timesheet.timesheet_id)
            self._by_id[timesheet.timesheet_id] = timesheet
            if timesheet.superseded:
                if self._id_by_key.get(timesheet.key) == timesheet.timesheet_id:
                    del self._id_by_key[timesheet.key]
            else:
                self._id_by_key[timesheet.key] = timesheet.timesheet_id
