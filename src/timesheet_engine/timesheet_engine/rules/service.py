from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_optional_time
from ..common.ids import new_id
from ..common.validators import (
    require_bool,
    require_min_float,
    require_non_empty,
    require_non_negative_int,
    require_positive_float,
)
from ..core.constants import DEFAULT_RULE_SET_ID, RULE_SET_ID_PREFIX
from ..core.enums import RoundingPolicy
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRuleSet
from .repository import RuleSetRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "name",
    "standard_hours_per_day",
    "grace_minutes",
    "rounding_policy",
    "overtime_requires_approval",
    "night_diff_start",
    "night_diff_end",
    "holiday_multiplier",
}


def _parse_policy(value: Any) -> RoundingPolicy:
    if isinstance(value, RoundingPolicy):
        return value
    try:
        return RoundingPolicy(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in RoundingPolicy)
        raise ValidationError(f"rounding_policy must be one of: {allowed}")


def build_rule_set(rule_set_id: str, fields: Mapping[str, Any]) -> AttendanceRuleSet:
    """Validate raw fields (API payload, seed file, settings) into a rule set."""

    unknown = set(fields) - _EDITABLE_FIELDS - {"archived"}
    if unknown:
        raise ValidationError(f"Unknown rule set fields: {', '.join(sorted(unknown))}")

    night_start = parse_optional_time(fields.get("night_diff_start"))
    night_end = parse_optional_time(fields.get("night_diff_end"))
    if (night_start is None) != (night_end is None):
        raise ValidationError("night_diff_start and night_diff_end must be set together")

    return AttendanceRuleSet(
        rule_set_id=rule_set_id,
        name=require_non_empty(fields.get("name", ""), "name"),
        standard_hours_per_day=require_positive_float(fields.get("standard_hours_per_day", 8), "standard_hours_per_day"),
        grace_minutes=require_non_negative_int(fields.get("grace_minutes", 0), "grace_minutes"),
        rounding_policy=_parse_policy(fields.get("rounding_policy", RoundingPolicy.NONE)),
        overtime_requires_approval=require_bool(
            fields.get("overtime_requires_approval", False), "overtime_requires_approval"
        ),
        night_diff_start=night_start,
        night_diff_end=night_end,
        holiday_multiplier=require_min_float(fields.get("holiday_multiplier", 1.0), "holiday_multiplier", 1.0),
        archived=require_bool(fields.get("archived", False), "archived"),
    )


class RuleSetService:
    """Use cases for the rule set registry (create, edit, archive, lookup)."""

    def __init__(self, rule_sets: RuleSetRepository):
        self._rule_sets = rule_sets

    def add_rule_set(self, **fields) -> AttendanceRuleSet:
        rule_set = build_rule_set(new_id(RULE_SET_ID_PREFIX), fields)
        self._rule_sets.upsert(rule_set)
        logger.info("Rule set %s (%s) added", rule_set.rule_set_id, rule_set.name)
        return rule_set

    def update_rule_set(self, rule_set_id: str, patch: Mapping[str, Any]) -> AttendanceRuleSet:
        current = self.get_rule_set(rule_set_id)
        if "id" in patch or "rule_set_id" in patch:
            raise ValidationError("Rule set id cannot be changed")
        unknown = set(patch) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown rule set fields: {', '.join(sorted(unknown))}")

        merged = {**_as_fields(current), **patch}
        updated = build_rule_set(rule_set_id, merged)
        self._rule_sets.upsert(updated)
        logger.info("Rule set %s updated (%s)", rule_set_id, ", ".join(sorted(patch)))
        return updated

    def get_rule_set(self, rule_set_id: str) -> AttendanceRuleSet:
        rule_set = self._rule_sets.get(rule_set_id)
        if not rule_set:
            raise NotFoundError(f"Rule set {rule_set_id} does not exist")
        return rule_set

    def get_active_rule_set(self, rule_set_id: str) -> AttendanceRuleSet:
        """Rule set usable for a new computation (archived ones are refused)."""
        rule_set = self.get_rule_set(rule_set_id)
        if rule_set.archived:
            raise ValidationError(f"Rule set {rule_set_id} is archived")
        return rule_set

    def list_rule_sets(self, *, include_archived: bool = False) -> Sequence[AttendanceRuleSet]:
        items = [r for r in self._rule_sets.list_all() if include_archived or not r.archived]
        items.sort(key=lambda r: r.rule_set_id)
        return items

    def archive_rule_set(self, rule_set_id: str) -> AttendanceRuleSet:
        """Soft delete: historical timesheets keep resolving the rule set."""
        if rule_set_id == DEFAULT_RULE_SET_ID:
            raise ValidationError("The default rule set cannot be archived")
        current = self.get_rule_set(rule_set_id)
        if current.archived:
            return current
        archived = replace(current, archived=True)
        self._rule_sets.upsert(archived)
        logger.info("Rule set %s archived", rule_set_id)
        return archived

    def holiday_rate(self, rule_set_id: str, *, is_holiday: bool = True) -> float:
        """Pay multiplier payroll applies on a flagged holiday (1.0 otherwise)."""
        rule_set = self.get_rule_set(rule_set_id)
        return rule_set.holiday_multiplier if is_holiday else 1.0

    def ensure_default(self, fields: Optional[Mapping[str, Any]]) -> AttendanceRuleSet:
        existing = self._rule_sets.get(DEFAULT_RULE_SET_ID)
        if existing:
            return existing
        rule_set = build_rule_set(DEFAULT_RULE_SET_ID, dict(fields or {}))
        self._rule_sets.upsert(rule_set)
        return rule_set


def _as_fields(rule_set: AttendanceRuleSet) -> dict:
    return {
        "name": rule_set.name,
        "standard_hours_per_day": rule_set.standard_hours_per_day,
        "grace_minutes": rule_set.grace_minutes,
        "rounding_policy": rule_set.rounding_policy,
        "overtime_requires_approval": rule_set.overtime_requires_approval,
        "night_diff_start": rule_set.night_diff_start,
        "night_diff_end": rule_set.night_diff_end,
        "holiday_multiplier": rule_set.holiday_multiplier,
        "archived": rule_set.archived,
    }
