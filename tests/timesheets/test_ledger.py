from __future__ import annotations

import itertools
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest

from src.timesheet_engine.timesheet_engine.core.enums import SegmentKind, TimesheetStatus
from src.timesheet_engine.timesheet_engine.core.exceptions import (
    DuplicateKeyError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.timesheet_engine.timesheet_engine.timesheets.ledger import TimesheetLedger
from src.timesheet_engine.timesheet_engine.timesheets.memory_repository import InMemoryTimesheetRepository
from src.timesheet_engine.timesheet_engine.timesheets.model import TimesheetComputation, TimesheetSegment

FIXED_NOW = datetime(2026, 3, 3, 9, 0, 0)


def make_computation(employee_id="EMP-1", work_date=date(2026, 3, 2), total=480) -> TimesheetComputation:
    return TimesheetComputation(
        employee_id=employee_id,
        work_date=work_date,
        rule_set_id="RS-DEFAULT",
        shift_id=None,
        segments=(TimesheetSegment(480, 480 + total, SegmentKind.REGULAR),),
        total_minutes=total,
        regular_minutes=total,
        overtime_minutes=0,
        night_diff_minutes=0,
        late_minutes=0,
        undertime_minutes=0,
        rounded_check_in=480,
        rounded_check_out=480 + total + 60,
        incomplete=False,
        overtime_payable=True,
    )


@pytest.fixture()
def repo():
    return InMemoryTimesheetRepository()


@pytest.fixture()
def ledger(repo):
    counter = itertools.count(1)
    return TimesheetLedger(repo, clock=lambda: FIXED_NOW, id_factory=lambda: f"TS-{next(counter)}")


def test_record_creates_computed_timesheet(ledger):
    ts = ledger.record(make_computation())

    assert ts.timesheet_id == "TS-1"
    assert ts.status == TimesheetStatus.COMPUTED
    assert ts.computed_at == FIXED_NOW
    assert ts.approved_by is None


def test_second_record_for_same_key_is_refused(ledger, repo):
    ledger.record(make_computation())

    with pytest.raises(DuplicateKeyError):
        ledger.record(make_computation(total=300))

    assert len(repo.list_all()) == 1
    assert repo.get_for_key("EMP-1", date(2026, 3, 2)).total_minutes == 480


def test_approve_requires_submitted(ledger):
    ts = ledger.record(make_computation())

    with pytest.raises(InvalidTransitionError):
        ledger.approve(ts.timesheet_id, "MGR-1")

    assert ledger.get(ts.timesheet_id).status == TimesheetStatus.COMPUTED


def test_approved_timesheet_is_immutable(ledger):
    ts = ledger.record(make_computation())
    ledger.submit(ts.timesheet_id)
    approved = ledger.approve(ts.timesheet_id, "MGR-1")

    assert approved.status == TimesheetStatus.APPROVED
    assert approved.approved_by == "MGR-1"
    assert approved.decided_at == FIXED_NOW
    assert approved.is_payable

    with pytest.raises(InvalidTransitionError):
        ledger.submit(ts.timesheet_id)
    with pytest.raises(InvalidTransitionError):
        ledger.reject(ts.timesheet_id, "MGR-2")


def test_submit_only_from_computed(ledger):
    ts = ledger.record(make_computation())
    ledger.submit(ts.timesheet_id)

    with pytest.raises(InvalidTransitionError):
        ledger.submit(ts.timesheet_id)


def test_decision_requires_an_approver(ledger):
    ts = ledger.record(make_computation())
    ledger.submit(ts.timesheet_id)

    with pytest.raises(ValidationError):
        ledger.approve(ts.timesheet_id, "  ")


def test_unknown_id_is_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.submit("TS-404")


def test_rejected_key_stays_locked_until_cleared(ledger, repo):
    ts = ledger.record(make_computation())
    ledger.submit(ts.timesheet_id)
    rejected = ledger.reject(ts.timesheet_id, "MGR-1")
    assert rejected.status == TimesheetStatus.REJECTED
    assert rejected.approved_by == "MGR-1"

    with pytest.raises(DuplicateKeyError):
        ledger.record(make_computation())

    cleared = ledger.clear_rejected(ts.timesheet_id, "OPS-1")
    assert cleared.superseded and cleared.cleared_by == "OPS-1"

    fresh = ledger.record(make_computation(total=420))
    assert fresh.timesheet_id != ts.timesheet_id
    assert repo.get_for_key("EMP-1", date(2026, 3, 2)).timesheet_id == fresh.timesheet_id
    assert len(repo.list_all(include_superseded=True)) == 2


def test_only_rejected_timesheets_can_be_cleared(ledger):
    ts = ledger.record(make_computation())
    ledger.submit(ts.timesheet_id)
    ledger.approve(ts.timesheet_id, "MGR-1")

    with pytest.raises(InvalidTransitionError):
        ledger.clear_rejected(ts.timesheet_id, "OPS-1")


def test_recompute_replaces_figures_while_computed(ledger):
    ts = ledger.record(make_computation())
    updated = ledger.recompute(ts.timesheet_id, make_computation(total=300))

    assert updated.timesheet_id == ts.timesheet_id
    assert ledger.get(ts.timesheet_id).total_minutes == 300


def test_recompute_refused_after_submit(ledger):
    ts = ledger.record(make_computation())
    ledger.submit(ts.timesheet_id)

    with pytest.raises(InvalidTransitionError):
        ledger.recompute(ts.timesheet_id, make_computation(total=300))


def test_recompute_must_keep_the_key(ledger):
    ts = ledger.record(make_computation())

    with pytest.raises(ValidationError):
        ledger.recompute(ts.timesheet_id, make_computation(employee_id="EMP-2"))


def test_pending_and_approved_queries(ledger):
    a = ledger.record(make_computation("EMP-1", date(2026, 3, 2)))
    b = ledger.record(make_computation("EMP-1", date(2026, 3, 3)))
    ledger.record(make_computation("EMP-2", date(2026, 3, 2)))
    ledger.submit(a.timesheet_id)
    ledger.submit(b.timesheet_id)
    ledger.approve(b.timesheet_id, "MGR-1")

    assert [t.timesheet_id for t in ledger.get_pending_approval()] == [a.timesheet_id]
    assert [t.timesheet_id for t in ledger.get_approved("EMP-1", date(2026, 3, 1), date(2026, 3, 31))] == [
        b.timesheet_id
    ]
    assert ledger.get_approved("EMP-1", date(2026, 4, 1), date(2026, 4, 30)) == []
    assert len(ledger.get_by_date(date(2026, 3, 2))) == 2
    assert len(ledger.get_by_employee("EMP-1")) == 2


def test_concurrent_records_for_one_key_create_one_timesheet(repo):
    ledger = TimesheetLedger(repo, clock=lambda: FIXED_NOW)

    def attempt(_):
        try:
            ledger.record(make_computation())
            return "ok"
        except DuplicateKeyError:
            return "duplicate"

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(16)))

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == 15
    assert len(repo.list_all()) == 1
    assert ledger.lock_count == 0


def test_key_locks_are_released_after_use(ledger):
    for day in range(1, 11):
        ts = ledger.record(make_computation(work_date=date(2026, 3, day)))
        ledger.submit(ts.timesheet_id)

    with pytest.raises(DuplicateKeyError):
        ledger.record(make_computation(work_date=date(2026, 3, 1)))

    assert ledger.lock_count == 0


def test_key_lock_is_held_only_inside_the_block(ledger):
    key = ("EMP-1", date(2026, 3, 2))

    with ledger.locked(key):
        assert ledger.lock_count == 1

    assert ledger.lock_count == 0
