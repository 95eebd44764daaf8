from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.rule_set_service

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/rule-sets", methods=["GET"], endpoint="list_rule_sets")
    def list_rule_sets():
        include_archived = request.args.get("include_archived", "0") in {"1", "true", "yes"}
        items = service.list_rule_sets(include_archived=include_archived)
        return jsonify([r.to_dict() for r in items]), 200

    @app.route("/api/rule-sets/<rule_set_id>", methods=["GET"], endpoint="get_rule_set")
    def get_rule_set(rule_set_id: str):
        return jsonify(service.get_rule_set(rule_set_id).to_dict()), 200

    @app.route("/api/rule-sets", methods=["POST"], endpoint="add_rule_set")
    def add_rule_set():
        return jsonify(service.add_rule_set(**_body()).to_dict()), 201

    @app.route("/api/rule-sets/<rule_set_id>", methods=["PATCH"], endpoint="update_rule_set")
    def update_rule_set(rule_set_id: str):
        return jsonify(service.update_rule_set(rule_set_id, _body()).to_dict()), 200

    @app.route("/api/rule-sets/<rule_set_id>", methods=["DELETE"], endpoint="archive_rule_set")
    def archive_rule_set(rule_set_id: str):
        return jsonify(service.archive_rule_set(rule_set_id).to_dict()), 200
