from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceLog, EmployeeDirectory
from ..core.exceptions import MissingCheckInError, NoAttendanceLogError, ValidationError
from ..rules.service import RuleSetService
from ..shifts.service import ShiftService
from .bulk import BulkComputeOrchestrator, BulkComputeResult
from .calculator.base import TimesheetCalculator
from .calculator.standard_calculator import StandardTimesheetCalculator
from .ledger import TimesheetLedger
from .model import Timesheet, TimesheetInput, describe_input, input_from_event

logger = logging.getLogger(__name__)


class TimesheetService:
    """Public use cases: compute, bulk compute, approval workflow and queries."""

    def __init__(
        self,
        ledger: TimesheetLedger,
        rule_sets: RuleSetService,
        shifts: ShiftService,
        attendance: AttendanceLog,
        employees: EmployeeDirectory,
        *,
        calculator: Optional[TimesheetCalculator] = None,
    ):
        self._ledger = ledger
        self._rule_sets = rule_sets
        self._shifts = shifts
        self._attendance = attendance
        self._calculator = calculator or StandardTimesheetCalculator()
        self._bulk = BulkComputeOrchestrator(attendance, employees, shifts, ledger, self._calculator)

    # Computation

    def compute_timesheet(self, data: TimesheetInput) -> Timesheet:
        """Compute from explicit times and record the result (status=computed)."""
        rule_set = self._rule_sets.get_active_rule_set(data.rule_set_id)
        computation = self._calculator.compute(data, rule_set)
        logger.debug("Computed %s -> %d min", describe_input(data), computation.total_minutes)
        return self._ledger.record(computation)

    def compute_for_attendance(
        self,
        employee_id: str,
        work_date: date,
        rule_set_id: str,
        *,
        shift_id: Optional[str] = None,
    ) -> Timesheet:
        """Compute one day straight from the attendance log."""
        event = self._find_event(employee_id, work_date)
        if event.check_in is None:
            raise MissingCheckInError(f"{employee_id} has no check-in on {work_date.isoformat()}")

        shift = self._shifts.resolve_shift(employee_id, override_shift_id=shift_id)
        return self.compute_timesheet(input_from_event(event, rule_set_id=rule_set_id, shift=shift))

    def recompute_timesheet(self, timesheet_id: str) -> Timesheet:
        """Refresh a still-computed record from the current log, shift and rule set."""
        current = self._ledger.get(timesheet_id)
        event = self._find_event(current.employee_id, current.work_date)
        if event.check_in is None:
            raise MissingCheckInError(
                f"{current.employee_id} has no check-in on {current.work_date.isoformat()}"
            )

        rule_set = self._rule_sets.get_active_rule_set(current.rule_set_id)
        override = current.shift_id if current.shift_id and self._is_known_shift(current.shift_id) else None
        shift = self._shifts.resolve_shift(current.employee_id, override_shift_id=override)
        data = input_from_event(event, rule_set_id=rule_set.rule_set_id, shift=shift)
        return self._ledger.recompute(timesheet_id, self._calculator.compute(data, rule_set))

    def bulk_compute_timesheets(self, rule_set_id: str) -> BulkComputeResult:
        rule_set = self._rule_sets.get_active_rule_set(rule_set_id)
        return self._bulk.run(rule_set)

    # Workflow

    def submit_timesheet(self, timesheet_id: str) -> Timesheet:
        return self._ledger.submit(timesheet_id)

    def approve_timesheet(self, timesheet_id: str, approver_id: str) -> Timesheet:
        return self._ledger.approve(timesheet_id, approver_id)

    def reject_timesheet(self, timesheet_id: str, approver_id: str) -> Timesheet:
        return self._ledger.reject(timesheet_id, approver_id)

    def clear_rejected_timesheet(self, timesheet_id: str, operator_id: str) -> Timesheet:
        return self._ledger.clear_rejected(timesheet_id, operator_id)

    # Queries

    def get_timesheet(self, timesheet_id: str) -> Timesheet:
        return self._ledger.get(timesheet_id)

    def get_pending_approval(self) -> Sequence[Timesheet]:
        return self._ledger.get_pending_approval()

    def get_by_employee(self, employee_id: str) -> Sequence[Timesheet]:
        return self._ledger.get_by_employee(employee_id)

    def get_by_date(self, work_date: date) -> Sequence[Timesheet]:
        return self._ledger.get_by_date(work_date)

    def get_approved(self, employee_id: str, period_start: date, period_end: date) -> Sequence[Timesheet]:
        if period_end < period_start:
            raise ValidationError("period_end must be >= period_start")
        return self._ledger.get_approved(employee_id, period_start, period_end)

    def _find_event(self, employee_id: str, work_date: date) -> AttendanceEvent:
        for event in self._attendance.get_attendance_events():
            if event.employee_id == employee_id and event.work_date == work_date:
                return event
        raise NoAttendanceLogError(f"No attendance log for {employee_id} on {work_date.isoformat()}")

    def _is_known_shift(self, shift_id: str) -> bool:
        return any(s.shift_id == shift_id for s in self._shifts.list_shifts())
