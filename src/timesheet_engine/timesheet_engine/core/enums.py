from __future__ import annotations

from enum import Enum


class RoundingPolicy(str, Enum):
    """Quantization applied to check-in/check-out before duration math."""

    NONE = "none"
    NEAREST_15 = "nearest_15"
    NEAREST_30 = "nearest_30"

    @property
    def increment(self) -> int:
        return {
            RoundingPolicy.NONE: 1,
            RoundingPolicy.NEAREST_15: 15,
            RoundingPolicy.NEAREST_30: 30,
        }[self]


class AttendanceStatus(str, Enum):
    """Day status reported by the attendance log."""

    PRESENT = "present"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"


class SegmentKind(str, Enum):
    REGULAR = "regular"
    OVERTIME = "overtime"


class TimesheetStatus(str, Enum):
    """Approval workflow state of a timesheet.

    computed -> submitted -> approved | rejected. Approved and rejected are terminal.
    """

    COMPUTED = "computed"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (TimesheetStatus.APPROVED, TimesheetStatus.REJECTED)

    def can_transition_to(self, target: "TimesheetStatus") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    TimesheetStatus.COMPUTED: frozenset({TimesheetStatus.SUBMITTED}),
    TimesheetStatus.SUBMITTED: frozenset({TimesheetStatus.APPROVED, TimesheetStatus.REJECTED}),
    TimesheetStatus.APPROVED: frozenset(),
    TimesheetStatus.REJECTED: frozenset(),
}
