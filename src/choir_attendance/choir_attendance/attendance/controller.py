from __future__ import annotations

from flask import Flask, request

from ..common.http import body, date_arg, int_arg, json_api, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/sheet", methods=["GET"], endpoint="attendance_sheet")
    @json_api
    def attendance_sheet():
        part = request.args.get("part") or ""
        if not part:
            raise ValidationError("part is required")
        day = date_arg(request.args.get("date"), default_today=True)
        rows = container.ledger.part_sheet(part, day)
        return ok(rows, part=part, date=day)

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="attendance_toggle")
    @json_api
    def attendance_toggle():
        payload = body()
        member_id = int_arg(payload.get("member_id"), "member_id")
        day = date_arg(payload.get("date"), default_today=True)
        record = container.ledger.toggle(member_id, day, payload.get("status"))
        return ok(record, cleared=record is None)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @json_api
    def attendance_list():
        start = date_arg(request.args.get("start"))
        end = date_arg(request.args.get("end"))
        if start is None or end is None:
            raise ValidationError("start and end are required (YYYY-MM-DD)")
        ids = [int_arg(v, "member_id") for v in request.args.getlist("member_id")]
        records = container.ledger.find_for_period(ids or None, start, end)
        return ok(records, count=len(records))

    @app.route("/api/attendance/tokens", methods=["GET"], endpoint="attendance_tokens")
    @json_api
    def attendance_tokens():
        return ok(dict(container.normalizer.table))
