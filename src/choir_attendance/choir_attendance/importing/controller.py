from __future__ import annotations

from flask import Flask, request

from ..common.http import json_api, ok
from ..container import Container
from ..core.exceptions import ValidationError


def _rows() -> list:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        payload = payload.get("rows")
    if not isinstance(payload, list):
        raise ValidationError("Expected a JSON list of rows (or {\"rows\": [...]})")
    return payload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/import/rows", methods=["POST"], endpoint="import_rows")
    @json_api
    def import_rows():
        rows = _rows()
        if any(not isinstance(r, dict) for r in rows):
            raise ValidationError("Row import expects objects keyed by column name")
        result = container.importer.import_rows(rows)
        return ok(result, message=result.message)

    @app.route("/api/import/matrix", methods=["POST"], endpoint="import_matrix")
    @json_api
    def import_matrix():
        rows = _rows()
        if any(not isinstance(r, list) for r in rows):
            raise ValidationError("Matrix import expects a list of row arrays")
        result = container.importer.import_matrix(rows)
        return ok(result, message=result.message)

    @app.route("/api/import/members", methods=["POST"], endpoint="import_members")
    @json_api
    def import_members():
        rows = _rows()
        if any(not isinstance(r, dict) for r in rows):
            raise ValidationError("Roster import expects objects keyed by column name")
        result = container.member_service.bulk_update(rows)
        return ok(result, message=result.message)
