from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError


def _coerce_id(value: str) -> Any:
    return int(value) if value.isdigit() else value


def register(app: Flask, container: Container) -> None:
    records = container.record_service

    def _respond(response, *, created: bool = False):
        if not response.success and not response.degraded:
            return jsonify(response.as_dict()), 502
        return jsonify(response.as_dict()), 201 if created else 200

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"data": None, "success": False, "error": str(e)}), 404

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return jsonify({"data": None, "success": False, "error": str(e)}), 400

    @app.route("/api/collections", methods=["GET"], endpoint="api_collections")
    def api_collections():
        return jsonify({"collections": records.collections})

    @app.route("/api/<collection>", methods=["GET", "POST"], endpoint="api_records")
    def api_records(collection: str):
        if request.method == "POST":
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                raise ValidationError("Request body must be a JSON object")
            return _respond(records.create(collection, payload), created=True)

        args = request.args.to_dict()
        limit_s = args.pop("limit", None)
        limit = int(limit_s) if limit_s and limit_s.isdigit() else None
        filters = {k: _coerce_id(v) if k == "id" or k.endswith("_id") else v for k, v in args.items()}
        if limit is None:
            return _respond(records.list(collection, filters=filters or None))
        return _respond(records.list(collection, filters=filters or None, limit=limit))

    @app.route("/api/<collection>/<record_id>", methods=["GET", "PATCH", "DELETE"], endpoint="api_record")
    def api_record(collection: str, record_id: str):
        rid = _coerce_id(record_id)
        if request.method == "PATCH":
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                raise ValidationError("Request body must be a JSON object")
            return _respond(records.update(collection, rid, payload))
        if request.method == "DELETE":
            return _respond(records.delete(collection, rid))
        return _respond(records.get(collection, rid))
