from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import body, int_arg, json_api, ok
from ..common.json_utils import to_jsonable
from ..container import Container
from ..core.exceptions import MemberNotFoundError, ValidationError
from .model import Member

_EDITABLE = ("name", "part", "role", "lifecycle", "church_title", "phone", "birth_date")


def member_json(member: Member) -> dict:
    data = to_jsonable(member)
    data["is_active"] = member.is_active
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="members_list")
    @json_api
    def members_list():
        scope = (request.args.get("scope") or "active").lower()
        if scope == "all":
            members = container.directory.list_all()
        elif scope == "withdrawn":
            members = container.directory.list_withdrawn()
        elif scope == "soloists":
            members = container.directory.list_soloists()
        elif scope == "active":
            part = request.args.get("part")
            members = container.directory.find_by_group_active(part) if part else container.directory.list_active()
        else:
            raise ValidationError(f"Unknown scope: {scope}")
        return ok([member_json(m) for m in members], count=len(members))

    @app.route("/api/members/birthdays", methods=["GET"], endpoint="members_birthdays")
    @json_api
    def members_birthdays():
        raw = request.args.get("months") or str(now_local().month)
        months = [int_arg(m.strip(), "months") for m in raw.split(",") if m.strip()]
        return ok([member_json(m) for m in container.directory.find_birthdays(months)])

    @app.route("/api/members", methods=["POST"], endpoint="members_create")
    @json_api
    def members_create():
        payload = body()
        fields = {k: payload[k] for k in _EDITABLE if payload.get(k) is not None}
        member = container.member_service.add_member(**fields)
        return ok(member_json(member), status=201)

    @app.route("/api/members/<int:member_id>", methods=["GET"], endpoint="members_get")
    @json_api
    def members_get(member_id: int):
        member = container.directory.get(member_id)
        if not member:
            raise MemberNotFoundError("Member not found")
        return ok(member_json(member))

    @app.route("/api/members/<int:member_id>", methods=["PATCH", "PUT"], endpoint="members_update")
    @json_api
    def members_update(member_id: int):
        payload = body()
        fields = {k: payload[k] for k in _EDITABLE if k in payload and payload[k] is not None}
        return ok(member_json(container.member_service.update_member(member_id, **fields)))

    @app.route("/api/members/<int:member_id>/lifecycle", methods=["POST"], endpoint="members_lifecycle")
    @json_api
    def members_lifecycle(member_id: int):
        lifecycle = body().get("lifecycle")
        if not lifecycle:
            raise ValidationError("lifecycle is required")
        return ok(member_json(container.member_service.change_lifecycle(member_id, lifecycle)))

    @app.route("/api/members/<int:member_id>/withdraw", methods=["POST"], endpoint="members_withdraw")
    @json_api
    def members_withdraw(member_id: int):
        return ok(member_json(container.member_service.withdraw(member_id)))

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="members_delete")
    @json_api
    def members_delete(member_id: int):
        container.member_service.delete_member(member_id)
        return ok(None)

    @app.route("/api/members/<int:member_id>/stats", methods=["GET"], endpoint="members_stats")
    @json_api
    def members_stats(member_id: int):
        today = now_local().date()
        year = int_arg(request.args.get("year"), "year", default=today.year)
        month = int_arg(request.args.get("month"), "month", default=today.month)
        stats = container.aggregator.member_month_stats(member_id, year, month)
        data = to_jsonable(stats)
        data["member"] = member_json(stats.member)
        return ok(data)
