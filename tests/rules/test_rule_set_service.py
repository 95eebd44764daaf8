from __future__ import annotations

from datetime import time

import pytest

from src.timesheet_engine.timesheet_engine.core.enums import RoundingPolicy
from src.timesheet_engine.timesheet_engine.core.exceptions import NotFoundError, ValidationError
from src.timesheet_engine.timesheet_engine.rules.memory_repository import InMemoryRuleSetRepository
from src.timesheet_engine.timesheet_engine.rules.service import RuleSetService, build_rule_set


@pytest.fixture()
def service():
    svc = RuleSetService(InMemoryRuleSetRepository())
    svc.ensure_default({"name": "Default"})
    return svc


def test_build_rule_set_parses_raw_fields():
    rule_set = build_rule_set(
        "RS-X",
        {
            "name": "Night crew",
            "standard_hours_per_day": "7.5",
            "grace_minutes": "5",
            "rounding_policy": "NEAREST_15",
            "overtime_requires_approval": "true",
            "night_diff_start": "22:00",
            "night_diff_end": "06:00",
            "holiday_multiplier": 2,
        },
    )

    assert rule_set.standard_minutes == 450
    assert rule_set.grace_minutes == 5
    assert rule_set.rounding_policy == RoundingPolicy.NEAREST_15
    assert rule_set.overtime_requires_approval is True
    assert rule_set.night_diff_start == time(22, 0)
    assert rule_set.has_night_window
    assert rule_set.holiday_multiplier == 2.0


@pytest.mark.parametrize(
    "fields",
    [
        {"name": ""},
        {"name": "X", "grace_minutes": -1},
        {"name": "X", "standard_hours_per_day": 0},
        {"name": "X", "rounding_policy": "nearest_5"},
        {"name": "X", "holiday_multiplier": 0.5},
        {"name": "X", "night_diff_start": "22:00"},
        {"name": "X", "night_diff_start": "25:00", "night_diff_end": "06:00"},
        {"name": "X", "colour": "blue"},
    ],
)
def test_build_rule_set_rejects_bad_fields(fields):
    with pytest.raises(ValidationError):
        build_rule_set("RS-X", fields)


def test_add_assigns_a_fresh_id(service):
    a = service.add_rule_set(name="A")
    b = service.add_rule_set(name="B")

    assert a.rule_set_id.startswith("RS-")
    assert a.rule_set_id != b.rule_set_id
    assert service.get_rule_set(a.rule_set_id).name == "A"


def test_update_keeps_id_and_untouched_fields(service):
    created = service.add_rule_set(name="A", grace_minutes=5, rounding_policy="nearest_30")

    updated = service.update_rule_set(created.rule_set_id, {"grace_minutes": 12})

    assert updated.rule_set_id == created.rule_set_id
    assert updated.grace_minutes == 12
    assert updated.rounding_policy == RoundingPolicy.NEAREST_30
    assert updated.name == "A"


def test_update_refuses_id_change_and_unknown_fields(service):
    created = service.add_rule_set(name="A")

    with pytest.raises(ValidationError):
        service.update_rule_set(created.rule_set_id, {"id": "RS-OTHER"})
    with pytest.raises(ValidationError):
        service.update_rule_set(created.rule_set_id, {"colour": "blue"})


def test_update_unknown_rule_set_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.update_rule_set("RS-NOPE", {"grace_minutes": 1})


def test_archive_hides_from_listing_but_keeps_lookup(service):
    created = service.add_rule_set(name="A")

    service.archive_rule_set(created.rule_set_id)

    assert created.rule_set_id not in [r.rule_set_id for r in service.list_rule_sets()]
    assert created.rule_set_id in [r.rule_set_id for r in service.list_rule_sets(include_archived=True)]
    assert service.get_rule_set(created.rule_set_id).archived is True
    with pytest.raises(ValidationError):
        service.get_active_rule_set(created.rule_set_id)


def test_default_rule_set_cannot_be_archived(service):
    with pytest.raises(ValidationError):
        service.archive_rule_set("RS-DEFAULT")


def test_ensure_default_keeps_existing(service):
    service.update_rule_set("RS-DEFAULT", {"grace_minutes": 7})

    assert service.ensure_default({"name": "Other"}).grace_minutes == 7


def test_holiday_rate(service):
    created = service.add_rule_set(name="Holiday", holiday_multiplier=2.5)

    assert service.holiday_rate(created.rule_set_id) == 2.5
    assert service.holiday_rate(created.rule_set_id, is_holiday=False) == 1.0
