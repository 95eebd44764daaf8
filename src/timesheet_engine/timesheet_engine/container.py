from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.memory_repository import InMemoryAttendanceLog, InMemoryEmployeeDirectory
from .rules.memory_repository import InMemoryRuleSetRepository
from .rules.service import RuleSetService
from .shifts.memory_repository import InMemoryShiftAssignmentRepository, InMemoryShiftRepository
from .shifts.service import ShiftService, default_shift
from .timesheets.calculator.standard_calculator import StandardTimesheetCalculator
from .timesheets.ledger import TimesheetLedger
from .timesheets.memory_repository import InMemoryTimesheetRepository
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Container:
    rule_sets_repo: InMemoryRuleSetRepository
    shifts_repo: InMemoryShiftRepository
    assignments_repo: InMemoryShiftAssignmentRepository
    timesheets_repo: InMemoryTimesheetRepository
    attendance_log: InMemoryAttendanceLog
    employee_directory: InMemoryEmployeeDirectory

    ledger: TimesheetLedger
    rule_set_service: RuleSetService
    shift_service: ShiftService
    timesheet_service: TimesheetService


def build_container(
    *,
    default_rule_set: Optional[dict[str, Any]] = None,
    fallback_shift: Optional[dict[str, Any]] = None,
) -> Container:
    rule_sets_repo = InMemoryRuleSetRepository()
    shifts_repo = InMemoryShiftRepository()
    assignments_repo = InMemoryShiftAssignmentRepository()
    timesheets_repo = InMemoryTimesheetRepository()
    attendance_log = InMemoryAttendanceLog()
    employee_directory = InMemoryEmployeeDirectory()

    rule_set_service = RuleSetService(rule_sets_repo)
    rule_set_service.ensure_default(default_rule_set)
    shift_service = ShiftService(shifts_repo, assignments_repo, fallback_shift=default_shift(fallback_shift))
    ledger = TimesheetLedger(timesheets_repo)
    timesheet_service = TimesheetService(
        ledger,
        rule_set_service,
        shift_service,
        attendance_log,
        employee_directory,
        calculator=StandardTimesheetCalculator(),
    )

    return Container(
        rule_sets_repo=rule_sets_repo,
        shifts_repo=shifts_repo,
        assignments_repo=assignments_repo,
        timesheets_repo=timesheets_repo,
        attendance_log=attendance_log,
        employee_directory=employee_directory,
        ledger=ledger,
        rule_set_service=rule_set_service,
        shift_service=shift_service,
        timesheet_service=timesheet_service,
    )
