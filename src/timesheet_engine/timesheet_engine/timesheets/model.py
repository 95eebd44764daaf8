from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_minute, format_time
from ..core.constants import NIGHT_DIFF_MULTIPLIER, OVERTIME_MULTIPLIER, REGULAR_MULTIPLIER
from ..core.enums import SegmentKind, TimesheetStatus


def minutes_to_hours(minutes: int) -> float:
    return minutes / 60


@dataclass(frozen=True)
class TimesheetInput:
    """Everything the calculator needs for one employee-day."""

    employee_id: str
    work_date: date
    rule_set_id: str
    check_in: Optional[time]
    check_out: Optional[time]
    shift_start: time
    shift_end: time
    break_minutes: int = 0
    shift_id: Optional[str] = None

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_id, self.work_date)


@dataclass(frozen=True)
class TimesheetSegment:
    """Paid sub-interval on the work-date timeline (minute 1440 is next-day 00:00)."""

    start_minute: int
    end_minute: int
    kind: SegmentKind
    night: bool = False

    @property
    def minutes(self) -> int:
        return self.end_minute - self.start_minute

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.minutes)

    @property
    def multiplier(self) -> float:
        base = OVERTIME_MULTIPLIER if self.kind == SegmentKind.OVERTIME else REGULAR_MULTIPLIER
        if self.night:
            base *= NIGHT_DIFF_MULTIPLIER
        return round(base, 4)

    def to_dict(self) -> dict:
        return {
            "start": format_minute(self.start_minute),
            "end": format_minute(self.end_minute),
            "kind": self.kind.value,
            "night": self.night,
            "hours": round(self.hours, 2),
            "multiplier": self.multiplier,
        }


class HourBuckets:
    """Hour views over the authoritative minute buckets."""

    total_minutes: int
    regular_minutes: int
    overtime_minutes: int
    night_diff_minutes: int

    @property
    def total_hours(self) -> float:
        return minutes_to_hours(self.total_minutes)

    @property
    def regular_hours(self) -> float:
        return minutes_to_hours(self.regular_minutes)

    @property
    def overtime_hours(self) -> float:
        return minutes_to_hours(self.overtime_minutes)

    @property
    def night_diff_hours(self) -> float:
        return minutes_to_hours(self.night_diff_minutes)


@dataclass(frozen=True)
class TimesheetComputation(HourBuckets):
    """Pure calculator output: a timesheet without identity or workflow state."""

    employee_id: str
    work_date: date
    rule_set_id: str
    shift_id: Optional[str]
    segments: tuple[TimesheetSegment, ...]
    total_minutes: int
    regular_minutes: int
    overtime_minutes: int
    night_diff_minutes: int
    late_minutes: int
    undertime_minutes: int
    rounded_check_in: int
    rounded_check_out: int
    incomplete: bool
    overtime_payable: bool

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_id, self.work_date)


@dataclass(frozen=True)
class Timesheet(HourBuckets):
    """Ledger record: one computed employee-day moving through approval."""

    timesheet_id: str
    employee_id: str
    work_date: date
    rule_set_id: str
    shift_id: Optional[str]
    segments: tuple[TimesheetSegment, ...]
    total_minutes: int
    regular_minutes: int
    overtime_minutes: int
    night_diff_minutes: int
    late_minutes: int
    undertime_minutes: int
    rounded_check_in: int
    rounded_check_out: int
    incomplete: bool
    overtime_payable: bool
    status: TimesheetStatus
    computed_at: datetime
    approved_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    superseded: bool = False
    cleared_by: Optional[str] = None

    @classmethod
    def from_computation(
        cls,
        computation: TimesheetComputation,
        *,
        timesheet_id: str,
        computed_at: datetime,
    ) -> "Timesheet":
        values = {f.name: getattr(computation, f.name) for f in fields(computation)}
        return cls(
            timesheet_id=timesheet_id,
            status=TimesheetStatus.COMPUTED,
            computed_at=computed_at,
            **values,
        )

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_id, self.work_date)

    @property
    def is_payable(self) -> bool:
        return self.status == TimesheetStatus.APPROVED and not self.superseded

    def to_dict(self) -> dict:
        return {
            "id": self.timesheet_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "rule_set_id": self.rule_set_id,
            "shift_id": self.shift_id,
            "segments": [s.to_dict() for s in self.segments],
            "total_hours": round(self.total_hours, 2),
            "regular_hours": round(self.regular_hours, 2),
            "overtime_hours": round(self.overtime_hours, 2),
            "night_diff_hours": round(self.night_diff_hours, 2),
            "late_minutes": self.late_minutes,
            "undertime_minutes": self.undertime_minutes,
            "check_in": format_minute(self.rounded_check_in),
            "check_out": format_minute(self.rounded_check_out),
            "incomplete": self.incomplete,
            "overtime_payable": self.overtime_payable,
            "status": self.status.value,
            "computed_at": self.computed_at.isoformat(timespec="seconds"),
            "approved_by": self.approved_by,
            "decided_at": self.decided_at.isoformat(timespec="seconds") if self.decided_at else None,
            "superseded": self.superseded,
            "cleared_by": self.cleared_by,
        }


def input_from_event(event, *, rule_set_id: str, shift) -> TimesheetInput:
    """Calculator input for an attendance day worked on ``shift``."""
    return TimesheetInput(
        employee_id=event.employee_id,
        work_date=event.work_date,
        rule_set_id=rule_set_id,
        check_in=event.check_in,
        check_out=event.check_out,
        shift_start=shift.start_time,
        shift_end=shift.end_time,
        break_minutes=shift.break_minutes,
        shift_id=shift.shift_id,
    )


def describe_input(data: TimesheetInput) -> str:
    return (
        f"{data.employee_id}@{data.work_date.isoformat()} "
        f"{format_time(data.check_in) or '-'}..{format_time(data.check_out) or '-'}"
    )
