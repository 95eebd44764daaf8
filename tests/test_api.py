from __future__ import annotations

import pytest

from src.timesheet_engine.timesheet_engine.container import build_container
from src.timesheet_engine.timesheet_engine.main import create_app
from src.timesheet_engine.timesheet_engine.seed import apply_seed

SEED = {
    "employees": [{"id": "EMP-1"}, {"id": "EMP-2"}, {"id": "EMP-3", "active": False}],
    "attendance": [
        {"employee_id": "EMP-2", "date": "2026-03-02", "check_in": "08:05", "check_out": "17:00"},
        {"employee_id": "EMP-2", "date": "2026-03-03", "check_in": "08:00", "check_out": "19:00"},
        {"employee_id": "EMP-3", "date": "2026-03-02", "check_in": "08:00", "check_out": "17:00"},
    ],
}


@pytest.fixture()
def container():
    c = build_container(
        default_rule_set={
            "name": "Standard PH Rule Set",
            "grace_minutes": 10,
            "rounding_policy": "nearest_15",
            "overtime_requires_approval": True,
            "night_diff_start": "22:00",
            "night_diff_end": "06:00",
        }
    )
    apply_seed(c, SEED)
    return c


@pytest.fixture()
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


def _compute(client, **body):
    payload = {"employee_id": "EMP-1", "date": "2026-03-02", "check_in": "08:00", "check_out": "17:00"}
    payload.update(body)
    return client.post("/api/timesheets/compute", json=payload)


def test_compute_from_posted_times(client):
    resp = _compute(client)

    assert resp.status_code == 201
    data = resp.get_json()
    assert data["status"] == "computed"
    assert data["total_hours"] == 8.0
    assert data["shift_id"] == "SHIFT-DEFAULT"
    assert data["rule_set_id"] == "RS-DEFAULT"
    assert data["check_in"] == "08:00"


def test_default_rule_set_rounds_late_check_in_up(client):
    data = _compute(client, check_in="08:07", check_out="17:07").get_json()

    assert data["check_in"] == "08:15"
    assert data["check_out"] == "17:00"
    assert data["late_minutes"] == 5
    assert data["total_hours"] == 7.75


def test_duplicate_compute_is_a_conflict(client):
    _compute(client)

    resp = _compute(client, check_out="18:00")

    assert resp.status_code == 409
    error = resp.get_json()["error"]
    assert error["kind"] == "DuplicateKey"
    assert "EMP-1" in error["message"]


def test_compute_from_attendance_log(client):
    resp = client.post("/api/timesheets/compute", json={"employee_id": "EMP-2", "date": "2026-03-03"})

    assert resp.status_code == 201
    data = resp.get_json()
    assert data["overtime_hours"] == 2.0
    assert data["overtime_payable"] is False


def test_compute_without_log_entry(client):
    resp = client.post("/api/timesheets/compute", json={"employee_id": "EMP-1", "date": "2026-03-02"})

    assert resp.status_code == 422
    assert resp.get_json()["error"]["kind"] == "NoAttendanceLog"


def test_invalid_date_is_a_validation_error(client):
    resp = _compute(client, date="02/03/2026")

    assert resp.status_code == 422
    assert resp.get_json()["error"]["kind"] == "Validation"


def test_approval_workflow(client):
    ts_id = _compute(client).get_json()["id"]

    assert client.post(f"/api/timesheets/{ts_id}/approve", json={"approver_id": "MGR-1"}).status_code == 409
    assert client.post(f"/api/timesheets/{ts_id}/submit").status_code == 200

    pending = client.get("/api/timesheets/pending").get_json()
    assert [t["id"] for t in pending] == [ts_id]

    assert client.post(f"/api/timesheets/{ts_id}/approve", json={}).status_code == 422
    approved = client.post(f"/api/timesheets/{ts_id}/approve", json={"approver_id": "MGR-1"})
    assert approved.status_code == 200
    assert approved.get_json()["approved_by"] == "MGR-1"

    assert client.post(f"/api/timesheets/{ts_id}/reject", json={"approver_id": "MGR-1"}).status_code == 409
    assert client.get("/api/timesheets/pending").get_json() == []


def test_reject_then_clear_frees_the_day(client):
    ts_id = _compute(client).get_json()["id"]
    client.post(f"/api/timesheets/{ts_id}/submit")
    client.post(f"/api/timesheets/{ts_id}/reject", json={"approver_id": "MGR-1"})

    assert _compute(client).status_code == 409

    cleared = client.post(f"/api/timesheets/{ts_id}/clear", json={"operator_id": "OPS-1"})
    assert cleared.status_code == 200
    assert cleared.get_json()["superseded"] is True

    assert _compute(client).status_code == 201


def test_recompute_endpoint(client):
    ts_id = client.post(
        "/api/timesheets/compute", json={"employee_id": "EMP-2", "date": "2026-03-02"}
    ).get_json()["id"]

    resp = client.post(f"/api/timesheets/{ts_id}/recompute")

    assert resp.status_code == 200
    assert resp.get_json()["id"] == ts_id


def test_unknown_timesheet_is_not_found(client):
    resp = client.get("/api/timesheets/TS-NOPE")

    assert resp.status_code == 404
    assert resp.get_json()["error"]["kind"] == "NotFound"


def test_bulk_compute_is_idempotent(client):
    first = client.post("/api/timesheets/bulk-compute", json={}).get_json()
    second = client.post("/api/timesheets/bulk-compute", json={}).get_json()

    assert first["count"] == 2
    assert first["skipped_inactive"] == 1
    assert second["count"] == 0
    assert second["skipped_existing"] == 2


def test_list_timesheets_requires_a_filter(client):
    client.post("/api/timesheets/bulk-compute", json={})

    assert client.get("/api/timesheets").status_code == 422
    by_employee = client.get("/api/timesheets?employee_id=EMP-2").get_json()
    by_day = client.get("/api/timesheets?employee_id=EMP-2&date=2026-03-03").get_json()
    assert len(by_employee) == 2
    assert [t["date"] for t in by_day] == ["2026-03-03"]


def test_rule_set_endpoints(client):
    created = client.post("/api/rule-sets", json={"name": "Lenient", "grace_minutes": 20})
    assert created.status_code == 201
    rs_id = created.get_json()["id"]

    patched = client.patch(f"/api/rule-sets/{rs_id}", json={"rounding_policy": "nearest_30"})
    assert patched.get_json()["rounding_policy"] == "nearest_30"
    assert patched.get_json()["grace_minutes"] == 20

    assert client.delete(f"/api/rule-sets/{rs_id}").get_json()["archived"] is True
    assert rs_id not in [r["id"] for r in client.get("/api/rule-sets").get_json()]
    assert client.delete("/api/rule-sets/RS-DEFAULT").status_code == 422
    assert client.get("/api/rule-sets/RS-NOPE").status_code == 404


def test_shift_endpoints(client):
    created = client.post("/api/shifts", json={"name": "Night", "start_time": "22:00", "end_time": "06:00"})
    assert created.status_code == 201
    shift_id = created.get_json()["id"]

    assert client.put("/api/shifts/assignments/EMP-1", json={"shift_id": shift_id}).status_code == 200
    assignment = client.get("/api/shifts/assignments/EMP-1").get_json()
    assert assignment["shift"]["id"] == shift_id

    ts = _compute(client, check_in="22:00", check_out="06:00").get_json()
    assert ts["night_diff_hours"] == 8.0
    assert ts["check_out"] == "06:00+1"

    deleted = client.delete(f"/api/shifts/{shift_id}").get_json()
    assert deleted["unassigned_employees"] == ["EMP-1"]
    assert client.get("/api/shifts/assignments/EMP-1").get_json()["shift"] is None
    assert client.put("/api/shifts/assignments/EMP-1", json={"shift_id": shift_id}).status_code == 404
