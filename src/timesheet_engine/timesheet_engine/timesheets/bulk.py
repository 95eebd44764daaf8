from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from ..attendance.repository import AttendanceLog, EmployeeDirectory
from ..core.enums import AttendanceStatus, TimesheetStatus
from ..core.exceptions import DomainError, DuplicateKeyError
from ..rules.model import AttendanceRuleSet
from ..shifts.service import ShiftService
from .calculator.base import TimesheetCalculator
from .ledger import TimesheetLedger
from .model import input_from_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkFailure:
    employee_id: str
    work_date: date
    kind: str
    message: str

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "kind": self.kind,
            "message": self.message,
        }


@dataclass
class BulkComputeResult:
    count: int = 0
    skipped_locked: int = 0
    skipped_existing: int = 0
    skipped_inactive: int = 0
    failures: list[BulkFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "skipped_locked": self.skipped_locked,
            "skipped_existing": self.skipped_existing,
            "skipped_inactive": self.skipped_inactive,
            "failures": [f.to_dict() for f in self.failures],
        }


class BulkComputeOrchestrator:
    """Materialize timesheets for every eligible attendance day not yet computed.

    Re-running without new attendance events records nothing.
    """

    def __init__(
        self,
        attendance: AttendanceLog,
        employees: EmployeeDirectory,
        shifts: ShiftService,
        ledger: TimesheetLedger,
        calculator: TimesheetCalculator,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._ledger = ledger
        self._calculator = calculator

    def run(self, rule_set: AttendanceRuleSet) -> BulkComputeResult:
        keys = self._ledger.list_keys()
        locked = {key for key, status in keys.items() if status != TimesheetStatus.COMPUTED}
        seen = set(keys)

        result = BulkComputeResult()
        for event in self._attendance.get_attendance_events():
            if event.check_in is None or event.status != AttendanceStatus.PRESENT:
                continue
            if event.key in locked:
                result.skipped_locked += 1
                continue
            if event.key in seen:
                result.skipped_existing += 1
                continue

            employee = self._employees.get_employee(event.employee_id)
            if not employee or not employee.active:
                result.skipped_inactive += 1
                continue

            seen.add(event.key)
            try:
                shift = self._shifts.resolve_shift(event.employee_id)
                data = input_from_event(event, rule_set_id=rule_set.rule_set_id, shift=shift)
                self._ledger.record(self._calculator.compute(data, rule_set))
            except DuplicateKeyError:
                # Another writer recorded the key after the snapshot above.
                result.skipped_existing += 1
            except DomainError as e:
                logger.warning(
                    "Bulk compute skipped %s on %s: %s", event.employee_id, event.work_date.isoformat(), e
                )
                result.failures.append(BulkFailure(event.employee_id, event.work_date, e.kind, str(e)))
            else:
                result.count += 1

        logger.info(
            "Bulk compute with %s: %d computed, %d locked, %d existing, %d inactive, %d failed",
            rule_set.rule_set_id,
            result.count,
            result.skipped_locked,
            result.skipped_existing,
            result.skipped_inactive,
            len(result.failures),
        )
        return result
