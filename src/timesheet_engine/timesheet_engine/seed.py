"""Load a JSON seed document into the in-memory stores.

Shape::

    {
      "rule_sets":   [{"id": "RS-NIGHT", "name": "...", "grace_minutes": 5, ...}],
      "shifts":      [{"id": "SHIFT-DAY", "name": "Day", "start_time": "08:00", ...}],
      "assignments": {"EMP-001": "SHIFT-DAY"},
      "employees":   [{"id": "EMP-001", "active": true}],
      "attendance":  [{"employee_id": "EMP-001", "date": "2026-03-02",
                       "check_in": "08:05", "check_out": "17:10", "status": "present"}]
    }

Every section is optional.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from .attendance.model import AttendanceEvent, Employee
from .common.datetime_utils import parse_iso_date, parse_optional_time
from .container import Container
from .core.enums import AttendanceStatus
from .core.exceptions import ValidationError
from .rules.service import build_rule_set
from .shifts.service import build_shift

logger = logging.getLogger(__name__)


def _without_id(item: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in item.items() if k != "id"}


def _attendance_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value or AttendanceStatus.PRESENT.value).lower())
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


def apply_seed(container: Container, data: Mapping[str, Any]) -> dict[str, int]:
    for item in data.get("rule_sets", []):
        container.rule_sets_repo.upsert(build_rule_set(str(item["id"]), _without_id(item)))

    for item in data.get("shifts", []):
        container.shifts_repo.upsert(build_shift(str(item["id"]), _without_id(item)))

    assignments = data.get("assignments", {})
    for employee_id, shift_id in assignments.items():
        container.shift_service.assign_shift(str(employee_id), str(shift_id))

    for item in data.get("employees", []):
        container.employee_directory.add_employee(
            Employee(employee_id=str(item["id"]), active=bool(item.get("active", True)))
        )

    for item in data.get("attendance", []):
        container.attendance_log.add_event(
            AttendanceEvent(
                employee_id=str(item["employee_id"]),
                work_date=parse_iso_date(item["date"]),
                check_in=parse_optional_time(item.get("check_in")),
                check_out=parse_optional_time(item.get("check_out")),
                status=_attendance_status(item.get("status")),
            )
        )

    counts = {
        "rule_sets": len(data.get("rule_sets", [])),
        "shifts": len(data.get("shifts", [])),
        "assignments": len(assignments),
        "employees": len(data.get("employees", [])),
        "attendance": len(data.get("attendance", [])),
    }
    logger.info("Seed applied: %s", ", ".join(f"{k}={v}" for k, v in counts.items()))
    return counts


def load_seed(container: Container, path: Path) -> dict[str, int]:
    with Path(path).open(encoding="utf-8") as fh:
        data = json.load(fh)
    return apply_seed(container, data)
