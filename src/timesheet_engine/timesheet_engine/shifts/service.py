from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_time_of_day
from ..common.ids import new_id
from ..common.validators import require_non_empty, require_non_negative_int
from ..core.constants import (
    DEFAULT_BREAK_MINUTES,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_ID,
    DEFAULT_SHIFT_START,
    SHIFT_ID_PREFIX,
)
from ..core.exceptions import NotFoundError, ValidationError
from .model import ShiftTemplate
from .repository import ShiftAssignmentRepository, ShiftRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"name", "start_time", "end_time", "grace_minutes", "break_minutes", "work_days"}


def _parse_work_days(value: Any) -> frozenset[int]:
    if value is None:
        return frozenset({1, 2, 3, 4, 5})
    try:
        days = frozenset(int(d) for d in value)
    except (TypeError, ValueError):
        raise ValidationError("work_days must be a list of weekday numbers 1-7")
    if any(d < 1 or d > 7 for d in days):
        raise ValidationError("work_days must be a list of weekday numbers 1-7")
    return days


def build_shift(shift_id: str, fields: Mapping[str, Any]) -> ShiftTemplate:
    unknown = set(fields) - _EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown shift fields: {', '.join(sorted(unknown))}")

    start = parse_time_of_day(fields.get("start_time") or "")
    end = parse_time_of_day(fields.get("end_time") or "")
    if start == end:
        raise ValidationError("Shift start and end must differ")

    return ShiftTemplate(
        shift_id=shift_id,
        name=require_non_empty(fields.get("name", ""), "name"),
        start_time=start,
        end_time=end,
        grace_minutes=require_non_negative_int(fields.get("grace_minutes", 0), "grace_minutes"),
        break_minutes=require_non_negative_int(fields.get("break_minutes", 0), "break_minutes"),
        work_days=_parse_work_days(fields.get("work_days")),
    )


def default_shift(fields: Optional[Mapping[str, Any]] = None) -> ShiftTemplate:
    """Window used for employees without an assignment (08:00-17:00, 60 min break)."""
    values = {
        "name": "Default",
        "start_time": DEFAULT_SHIFT_START,
        "end_time": DEFAULT_SHIFT_END,
        "break_minutes": DEFAULT_BREAK_MINUTES,
        **dict(fields or {}),
    }
    return build_shift(DEFAULT_SHIFT_ID, values)


class ShiftService:
    """Use cases for shift templates and the employee -> shift assignment map."""

    def __init__(
        self,
        shifts: ShiftRepository,
        assignments: ShiftAssignmentRepository,
        *,
        fallback_shift: Optional[ShiftTemplate] = None,
    ):
        self._shifts = shifts
        self._assignments = assignments
        self._fallback = fallback_shift or default_shift()

    @property
    def fallback_shift(self) -> ShiftTemplate:
        return self._fallback

    def create_shift(self, **fields) -> ShiftTemplate:
        shift = build_shift(new_id(SHIFT_ID_PREFIX), fields)
        self._shifts.upsert(shift)
        logger.info("Shift %s (%s) created", shift.shift_id, shift.name)
        return shift

    def update_shift(self, shift_id: str, patch: Mapping[str, Any]) -> ShiftTemplate:
        current = self.get_shift(shift_id)
        if "id" in patch or "shift_id" in patch:
            raise ValidationError("Shift id cannot be changed")

        merged = {
            "name": current.name,
            "start_time": current.start_time,
            "end_time": current.end_time,
            "grace_minutes": current.grace_minutes,
            "break_minutes": current.break_minutes,
            "work_days": current.work_days,
            **patch,
        }
        updated = build_shift(shift_id, merged)
        self._shifts.upsert(updated)
        logger.info("Shift %s updated (%s)", shift_id, ", ".join(sorted(patch)))
        return updated

    def delete_shift(self, shift_id: str) -> list[str]:
        """Delete a template and unassign every employee on it.

        Returns the employee ids that lost their assignment.
        """

        self.get_shift(shift_id)
        unassigned = list(self._assignments.employees_for_shift(shift_id))
        for employee_id in unassigned:
            self._assignments.unassign(employee_id)
        self._shifts.delete(shift_id)
        logger.info("Shift %s deleted, %d employee(s) unassigned", shift_id, len(unassigned))
        return unassigned

    def get_shift(self, shift_id: str) -> ShiftTemplate:
        shift = self._shifts.get(shift_id)
        if not shift:
            raise NotFoundError(f"Shift {shift_id} does not exist")
        return shift

    def list_shifts(self) -> Sequence[ShiftTemplate]:
        return sorted(self._shifts.list_all(), key=lambda s: s.shift_id)

    def assign_shift(self, employee_id: str, shift_id: str) -> None:
        employee_id = require_non_empty(employee_id, "employee_id")
        self.get_shift(shift_id)
        self._assignments.assign(employee_id, shift_id)

    def unassign_shift(self, employee_id: str) -> bool:
        return self._assignments.unassign(employee_id)

    def employees_on_shift(self, shift_id: str) -> Sequence[str]:
        return self._assignments.employees_for_shift(shift_id)

    def get_shift_assignment(self, employee_id: str) -> Optional[ShiftTemplate]:
        shift_id = self._assignments.get_shift_id(employee_id)
        if not shift_id:
            return None
        return self._shifts.get(shift_id)

    def resolve_shift(self, employee_id: str, *, override_shift_id: Optional[str] = None) -> ShiftTemplate:
        """Explicit override, then the assignment, then the fallback window."""
        if override_shift_id:
            return self.get_shift(override_shift_id)
        return self.get_shift_assignment(employee_id) or self._fallback
