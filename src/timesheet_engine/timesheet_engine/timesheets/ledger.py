from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterator, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.constants import TIMESHEET_ID_PREFIX
from ..core.enums import TimesheetStatus
from ..core.exceptions import DuplicateKeyError, InvalidTransitionError, NotFoundError, ValidationError
from .model import Timesheet, TimesheetComputation
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)

Key = tuple[str, date]


class TimesheetLedger:
    """At most one live timesheet per (employee, date), moved through approval.

    Every mutation for a key runs under that key's lock, and each record is built
    completely before it is written.
    """

    def __init__(
        self,
        timesheets: TimesheetRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = lambda: new_id(TIMESHEET_ID_PREFIX),
    ):
        self._timesheets = timesheets
        self._clock = clock
        self._new_id = id_factory
        self._guard = threading.Lock()
        # key -> [lock, number of callers holding or waiting on it]
        self._key_locks: dict[Key, list] = {}

    @contextmanager
    def locked(self, key: Key) -> Iterator[None]:
        with self._guard:
            entry = self._key_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._key_locks[key]

    @property
    def lock_count(self) -> int:
        """Keys that currently have a caller inside or waiting on ``locked``."""
        with self._guard:
            return len(self._key_locks)

    # Writes

    def record(self, computation: TimesheetComputation) -> Timesheet:
        with self.locked(computation.key):
            existing = self._timesheets.get_for_key(*computation.key)
            if existing:
                raise DuplicateKeyError(
                    f"Timesheet {existing.timesheet_id} already exists for "
                    f"{computation.employee_id} on {computation.work_date.isoformat()} "
                    f"(status={existing.status.value})"
                )
            timesheet = Timesheet.from_computation(
                computation, timesheet_id=self._new_id(), computed_at=self._clock()
            )
            self._timesheets.add(timesheet)

        logger.info(
            "Timesheet %s computed for %s on %s (%.2fh)",
            timesheet.timesheet_id,
            timesheet.employee_id,
            timesheet.work_date.isoformat(),
            timesheet.total_hours,
        )
        return timesheet

    def recompute(self, timesheet_id: str, computation: TimesheetComputation) -> Timesheet:
        """Replace the figures of a record that has not left ``computed``."""

        current = self.get(timesheet_id)
        if computation.key != current.key:
            raise ValidationError("Recomputation must target the same employee and date")

        with self.locked(current.key):
            current = self.get(timesheet_id)
            if current.superseded or current.status != TimesheetStatus.COMPUTED:
                raise InvalidTransitionError(
                    f"Timesheet {timesheet_id} is {current.status.value}; only computed records can be recomputed"
                )
            updated = Timesheet.from_computation(computation, timesheet_id=timesheet_id, computed_at=self._clock())
            self._timesheets.replace(updated)

        logger.info("Timesheet %s recomputed", timesheet_id)
        return updated

    def submit(self, timesheet_id: str) -> Timesheet:
        return self._transition(timesheet_id, TimesheetStatus.SUBMITTED)

    def approve(self, timesheet_id: str, approver_id: str) -> Timesheet:
        return self._transition(timesheet_id, TimesheetStatus.APPROVED, actor=approver_id)

    def reject(self, timesheet_id: str, approver_id: str) -> Timesheet:
        return self._transition(timesheet_id, TimesheetStatus.REJECTED, actor=approver_id)

    def clear_rejected(self, timesheet_id: str, operator_id: str) -> Timesheet:
        """Operator action: supersede a rejected record so the key can be computed again."""

        operator_id = require_non_empty(operator_id, "operator_id")
        current = self.get(timesheet_id)
        with self.locked(current.key):
            current = self.get(timesheet_id)
            if current.superseded or current.status != TimesheetStatus.REJECTED:
                raise InvalidTransitionError(
                    f"Timesheet {timesheet_id} is {current.status.value}; only rejected records can be cleared"
                )
            cleared = replace(current, superseded=True, cleared_by=operator_id)
            self._timesheets.replace(cleared)

        logger.info("Timesheet %s cleared by %s", timesheet_id, operator_id)
        return cleared

    def _transition(self, timesheet_id: str, target: TimesheetStatus, *, actor: Optional[str] = None) -> Timesheet:
        if target.is_terminal:
            actor = require_non_empty(actor or "", "approver_id")

        current = self.get(timesheet_id)
        with self.locked(current.key):
            current = self.get(timesheet_id)
            if current.superseded or not current.status.can_transition_to(target):
                raise InvalidTransitionError(
                    f"Cannot move timesheet {timesheet_id} from {current.status.value} to {target.value}"
                )
            if target.is_terminal:
                updated = replace(current, status=target, approved_by=actor, decided_at=self._clock())
            else:
                updated = replace(current, status=target)
            self._timesheets.replace(updated)

        logger.info("Timesheet %s %s -> %s", timesheet_id, current.status.value, target.value)
        return updated

    # Reads

    def get(self, timesheet_id: str) -> Timesheet:
        timesheet = self._timesheets.get(timesheet_id)
        if not timesheet:
            raise NotFoundError(f"Timesheet {timesheet_id} does not exist")
        return timesheet

    def get_for_key(self, employee_id: str, work_date: date) -> Optional[Timesheet]:
        return self._timesheets.get_for_key(employee_id, work_date)

    def list_keys(self) -> dict[Key, TimesheetStatus]:
        return self._timesheets.list_keys()

    def get_pending_approval(self) -> Sequence[Timesheet]:
        return self._timesheets.list_by_status(TimesheetStatus.SUBMITTED)

    def get_by_employee(self, employee_id: str) -> Sequence[Timesheet]:
        return [t for t in self._timesheets.list_all() if t.employee_id == employee_id]

    def get_by_date(self, work_date: date) -> Sequence[Timesheet]:
        return [t for t in self._timesheets.list_all() if t.work_date == work_date]

    def get_approved(self, employee_id: str, period_start: date, period_end: date) -> Sequence[Timesheet]:
        return [
            t
            for t in self._timesheets.list_by_status(TimesheetStatus.APPROVED)
            if t.employee_id == employee_id and period_start <= t.work_date <= period_end
        ]
