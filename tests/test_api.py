from datetime import date

import pytest

from src.choir_attendance.choir_attendance.core.enums import Part
from src.choir_attendance.choir_attendance.main import create_app


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    app.config["TESTING"] = True
    return app.test_client()


def test_member_crud_and_toggle(client):
    created = client.post("/api/members", json={"name": "Ann", "part": "테너", "lifecycle": "ACTIVE"})
    assert created.status_code == 201
    member = created.get_json()["data"]
    assert member["part"] == "Tenor"
    assert member["is_active"] is True

    res = client.post("/api/attendance/toggle", json={"member_id": member["member_id"], "date": "2026-02-08", "status": "O"})
    assert res.status_code == 200
    assert res.get_json()["data"]["status"] == "PRESENT"

    sheet = client.get("/api/attendance/sheet?part=Tenor&date=2026-02-08").get_json()
    assert [row["status"] for row in sheet["data"]] == ["PRESENT"]

    res = client.post("/api/attendance/toggle", json={"member_id": member["member_id"], "date": "2026-02-08", "status": None})
    assert res.get_json()["cleared"] is True

    res = client.post(f"/api/members/{member['member_id']}/withdraw")
    assert res.get_json()["data"]["lifecycle"] == "WITHDRAWN"


def test_row_import_reports_row_errors(client, members_repo):
    members_repo.add("Kim", Part.SOPRANO_A)
    members_repo.add("Kim", Part.ALTO_A)

    res = client.post("/api/import/rows", json={"rows": [{"name": "Kim", "date": "2026-02-01", "status": "결석"}]})

    body = res.get_json()
    assert res.status_code == 200
    assert (body["data"]["succeeded"], body["data"]["failed"]) == (0, 1)
    assert body["message"] == "0 succeeded, 1 failed"


def test_matrix_import_shape_error_is_400(client):
    res = client.post("/api/import/matrix", json=[["이름", "파트"], ["Ann", "Tenor"]])

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_monthly_report_and_member_stats(client, members_repo, container):
    ann = members_repo.add("Ann", Part.TENOR)
    container.ledger.upsert(ann.member_id, date(2026, 2, 7), "O")

    report = client.get("/api/reports/monthly?year=2026&month=2").get_json()["data"]
    assert report["statistics"]["overall"]["rate"] == 13

    stats = client.get(f"/api/members/{ann.member_id}/stats?year=2026&month=2").get_json()["data"]
    assert stats["attended_dates"] == ["2026-02-07"]
    assert stats["member"]["name"] == "Ann"


def test_bad_input_is_400_and_unexpected_error_is_500(client, container, monkeypatch):
    assert client.get("/api/reports/daily?date=2026/02/08").status_code == 400
    assert client.get("/api/reports/monthly?year=2026&month=13").status_code == 400

    def boom(year):
        raise RuntimeError("store down")

    monkeypatch.setattr(container.reports, "yearly", boom)
    res = client.get("/api/reports/yearly?year=2026")
    assert res.status_code == 500
    assert res.get_json() == {"success": False, "message": "Internal server error"}


def test_stats_endpoint_counts_overlapping_parts_once(client, members_repo):
    members_repo.add("Base", Part.SOPRANO_B)
    members_repo.add("Plus", Part.SOPRANO_B_PLUS)

    res = client.get(
        "/api/reports/stats",
        query_string={"start": "2026-02-01", "end": "2026-02-28", "part": ["Soprano B", "Soprano B+"]},
    )
    data = res.get_json()["data"]

    assert res.status_code == 200
    assert [g["group"] for g in data["groups"]] == ["Soprano B"]
    assert (data["overall"]["active_count"], data["overall"]["expected"]) == (2, 16)
