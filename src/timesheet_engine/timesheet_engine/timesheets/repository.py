from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import TimesheetStatus
from .model import Timesheet


class TimesheetRepository(Protocol):
    """Keyed timesheet store.

    ``get_for_key`` and ``list_keys`` only see non-superseded records.
    """

    def get(self, timesheet_id: str) -> Optional[Timesheet]:
        raise NotImplementedError

    def get_for_key(self, employee_id: str, work_date: date) -> Optional[Timesheet]:
        raise NotImplementedError

    def list_all(self, *, include_superseded: bool = False) -> Sequence[Timesheet]:
        raise NotImplementedError

    def list_by_status(self, status: TimesheetStatus) -> Sequence[Timesheet]:
        raise NotImplementedError

    def list_keys(self) -> dict[tuple[str, date], TimesheetStatus]:
        raise NotImplementedError

    def add(self, timesheet: Timesheet) -> None:
        raise NotImplementedError

    def replace(self, timesheet: Timesheet) -> None:
        """Overwrite the record with the same id."""

        raise NotImplementedError
