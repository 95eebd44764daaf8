from __future__ import annotations

from typing import Optional

from ...rules.model import AttendanceRuleSet
from ..model import TimesheetComputation, TimesheetInput
from ..rounding.factory import RoundingStrategyFactory
from ..timeline import night_windows, overlap_minutes, place_on_timeline, split_segments
from .base import TimesheetCalculator


class StandardTimesheetCalculator(TimesheetCalculator):
    """Standard rule: rounded (out - in) - break, split at the daily standard.

    Pure and deterministic: no clock, no I/O, no ids.
    """

    def __init__(self, rounding_factory: Optional[RoundingStrategyFactory] = None):
        self._rounding = rounding_factory or RoundingStrategyFactory()

    def compute(self, data: TimesheetInput, rule_set: AttendanceRuleSet) -> TimesheetComputation:
        day = place_on_timeline(data)
        strategy = self._rounding.for_policy(rule_set.rounding_policy)

        check_in = strategy.round_check_in(day.check_in, shift_start=day.shift_start)
        check_out = max(strategy.round_check_out(day.check_out, shift_end=day.shift_end), check_in)

        standard = rule_set.standard_minutes
        late = max(0, (check_in - day.shift_start) - rule_set.grace_minutes)
        undertime = max(0, day.shift_start + standard - check_out)

        worked = max(0, check_out - check_in - int(data.break_minutes))
        regular = min(worked, standard)
        overtime = worked - regular

        # Break is deducted from the tail of the attendance interval for segments;
        # night differential counts the whole attendance interval.
        paid = (check_in, check_in + worked)
        windows = night_windows(rule_set.night_diff_start, rule_set.night_diff_end) if rule_set.has_night_window else []

        return TimesheetComputation(
            employee_id=data.employee_id,
            work_date=data.work_date,
            rule_set_id=rule_set.rule_set_id,
            shift_id=data.shift_id,
            segments=split_segments(paid, check_in + regular, windows),
            total_minutes=worked,
            regular_minutes=regular,
            overtime_minutes=overtime,
            night_diff_minutes=overlap_minutes((check_in, check_out), windows),
            late_minutes=late,
            undertime_minutes=undertime,
            rounded_check_in=check_in,
            rounded_check_out=check_out,
            incomplete=day.incomplete,
            overtime_payable=overtime == 0 or not rule_set.overtime_requires_approval,
        )
