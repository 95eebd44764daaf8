from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_optional_time, parse_time_of_day
from ..common.validators import require_non_empty, require_non_negative_int
from ..container import Container
from ..core.constants import DEFAULT_RULE_SET_ID
from ..core.exceptions import ValidationError
from .model import TimesheetInput


def register(app: Flask, container: Container) -> None:
    service = container.timesheet_service

    def _body() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _input_from_body(data: dict) -> TimesheetInput:
        employee_id = require_non_empty(data.get("employee_id", ""), "employee_id")
        shift = container.shift_service.resolve_shift(employee_id, override_shift_id=data.get("shift_id"))
        return TimesheetInput(
            employee_id=employee_id,
            work_date=parse_iso_date(data.get("date") or ""),
            rule_set_id=data.get("rule_set_id") or DEFAULT_RULE_SET_ID,
            check_in=parse_optional_time(data.get("check_in")),
            check_out=parse_optional_time(data.get("check_out")),
            shift_start=parse_time_of_day(data.get("shift_start") or shift.start_time),
            shift_end=parse_time_of_day(data.get("shift_end") or shift.end_time),
            break_minutes=require_non_negative_int(data.get("break_minutes", shift.break_minutes), "break_minutes"),
            shift_id=shift.shift_id,
        )

    @app.route("/api/timesheets/compute", methods=["POST"], endpoint="compute_timesheet")
    def compute_timesheet():
        """Compute from posted times, or from the attendance log when no check-in is posted."""
        data = _body()
        if data.get("check_in"):
            ts = service.compute_timesheet(_input_from_body(data))
        else:
            ts = service.compute_for_attendance(
                require_non_empty(data.get("employee_id", ""), "employee_id"),
                parse_iso_date(data.get("date") or ""),
                data.get("rule_set_id") or DEFAULT_RULE_SET_ID,
                shift_id=data.get("shift_id"),
            )
        return jsonify(ts.to_dict()), 201

    @app.route("/api/timesheets/bulk-compute", methods=["POST"], endpoint="bulk_compute_timesheets")
    def bulk_compute_timesheets():
        data = _body()
        result = service.bulk_compute_timesheets(data.get("rule_set_id") or DEFAULT_RULE_SET_ID)
        return jsonify(result.to_dict()), 200

    @app.route("/api/timesheets/<timesheet_id>/recompute", methods=["POST"], endpoint="recompute_timesheet")
    def recompute_timesheet(timesheet_id: str):
        return jsonify(service.recompute_timesheet(timesheet_id).to_dict()), 200

    @app.route("/api/timesheets/<timesheet_id>/submit", methods=["POST"], endpoint="submit_timesheet")
    def submit_timesheet(timesheet_id: str):
        return jsonify(service.submit_timesheet(timesheet_id).to_dict()), 200

    @app.route("/api/timesheets/<timesheet_id>/approve", methods=["POST"], endpoint="approve_timesheet")
    def approve_timesheet(timesheet_id: str):
        approver_id = _body().get("approver_id", "")
        return jsonify(service.approve_timesheet(timesheet_id, approver_id).to_dict()), 200

    @app.route("/api/timesheets/<timesheet_id>/reject", methods=["POST"], endpoint="reject_timesheet")
    def reject_timesheet(timesheet_id: str):
        approver_id = _body().get("approver_id", "")
        return jsonify(service.reject_timesheet(timesheet_id, approver_id).to_dict()), 200

    @app.route("/api/timesheets/<timesheet_id>/clear", methods=["POST"], endpoint="clear_rejected_timesheet")
    def clear_rejected_timesheet(timesheet_id: str):
        operator_id = _body().get("operator_id", "")
        return jsonify(service.clear_rejected_timesheet(timesheet_id, operator_id).to_dict()), 200

    @app.route("/api/timesheets/pending", methods=["GET"], endpoint="pending_timesheets")
    def pending_timesheets():
        return jsonify([t.to_dict() for t in service.get_pending_approval()]), 200

    @app.route("/api/timesheets/<timesheet_id>", methods=["GET"], endpoint="get_timesheet")
    def get_timesheet(timesheet_id: str):
        return jsonify(service.get_timesheet(timesheet_id).to_dict()), 200

    @app.route("/api/timesheets", methods=["GET"], endpoint="list_timesheets")
    def list_timesheets():
        employee_id = (request.args.get("employee_id") or "").strip()
        work_date = (request.args.get("date") or "").strip()
        if employee_id:
            items = service.get_by_employee(employee_id)
            if work_date:
                day = parse_iso_date(work_date)
                items = [t for t in items if t.work_date == day]
        elif work_date:
            items = service.get_by_date(parse_iso_date(work_date))
        else:
            raise ValidationError("Filter by employee_id and/or date")
        return jsonify([t.to_dict() for t in items]), 200
