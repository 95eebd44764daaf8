from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    def list_shifts():
        return jsonify([s.to_dict() for s in service.list_shifts()]), 200

    @app.route("/api/shifts", methods=["POST"], endpoint="create_shift")
    def create_shift():
        return jsonify(service.create_shift(**_body()).to_dict()), 201

    @app.route("/api/shifts/<shift_id>", methods=["PATCH"], endpoint="update_shift")
    def update_shift(shift_id: str):
        return jsonify(service.update_shift(shift_id, _body()).to_dict()), 200

    @app.route("/api/shifts/<shift_id>", methods=["DELETE"], endpoint="delete_shift")
    def delete_shift(shift_id: str):
        unassigned = service.delete_shift(shift_id)
        return jsonify({"id": shift_id, "unassigned_employees": unassigned}), 200

    @app.route("/api/shifts/assignments/<employee_id>", methods=["PUT"], endpoint="assign_shift")
    def assign_shift(employee_id: str):
        shift_id = _body().get("shift_id", "")
        service.assign_shift(employee_id, shift_id)
        return jsonify({"employee_id": employee_id, "shift_id": shift_id}), 200

    @app.route("/api/shifts/assignments/<employee_id>", methods=["GET"], endpoint="get_shift_assignment")
    def get_shift_assignment(employee_id: str):
        shift = service.get_shift_assignment(employee_id)
        return jsonify({"employee_id": employee_id, "shift": shift.to_dict() if shift else None}), 200

    @app.route("/api/shifts/assignments/<employee_id>", methods=["DELETE"], endpoint="unassign_shift")
    def unassign_shift(employee_id: str):
        return jsonify({"employee_id": employee_id, "unassigned": service.unassign_shift(employee_id)}), 200
