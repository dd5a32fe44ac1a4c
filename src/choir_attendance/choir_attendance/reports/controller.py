from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import date_arg, int_arg, json_api, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _year_month() -> tuple[int, int]:
        today = now_local().date()
        year = int_arg(request.args.get("year"), "year", default=today.year)
        month = int_arg(request.args.get("month"), "month", default=today.month)
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")
        return year, month

    @app.route("/api/reports/daily", methods=["GET"], endpoint="report_daily")
    @json_api
    def report_daily():
        return ok(container.reports.daily(date_arg(request.args.get("date"), default_today=True)))

    @app.route("/api/reports/weekly", methods=["GET"], endpoint="report_weekly")
    @json_api
    def report_weekly():
        return ok(container.reports.weekly(date_arg(request.args.get("date"), default_today=True)))

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="report_monthly")
    @json_api
    def report_monthly():
        year, month = _year_month()
        return ok(container.reports.monthly(year, month))

    @app.route("/api/reports/yearly", methods=["GET"], endpoint="report_yearly")
    @json_api
    def report_yearly():
        year = int_arg(request.args.get("year"), "year", default=now_local().year)
        report = container.reports.yearly(year)
        return ok(report, total=report.total)

    @app.route("/api/reports/soloists", methods=["GET"], endpoint="report_soloists")
    @json_api
    def report_soloists():
        year, month = _year_month()
        return ok(container.reports.soloists(year, month))

    @app.route("/api/reports/stats", methods=["GET"], endpoint="report_stats")
    @json_api
    def report_stats():
        start = date_arg(request.args.get("start"))
        end = date_arg(request.args.get("end"))
        if start is None or end is None:
            raise ValidationError("start and end are required (YYYY-MM-DD)")
        groups = request.args.getlist("part") or None
        return ok(container.aggregator.compute(start, end, groups))
