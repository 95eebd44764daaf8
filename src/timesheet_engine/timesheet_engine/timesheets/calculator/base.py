from __future__ import annotations

from abc import ABC, abstractmethod

from ...rules.model import AttendanceRuleSet
from ..model import TimesheetComputation, TimesheetInput


class TimesheetCalculator(ABC):
    """Calculator interface (Strategy Pattern for timesheet computation)."""

    @abstractmethod
    def compute(self, data: TimesheetInput, rule_set: AttendanceRuleSet) -> TimesheetComputation:
        raise NotImplementedError
