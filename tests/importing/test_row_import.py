from datetime import date

from src.choir_attendance.choir_attendance.core.enums import AttendanceStatus, Part


def test_ambiguous_name_without_hint_fails_row_without_writing(container, members_repo, attendance_repo):
    members_repo.add("Kim", Part.SOPRANO_A)
    members_repo.add("Kim", Part.ALTO_A)

    result = container.importer.import_rows([{"name": "Kim", "date": "2026-02-01", "status": "결석"}])

    assert (result.succeeded, result.failed) == (0, 1)
    assert result.errors[0].startswith("[Kim, 2026-02-01]")
    assert "ambiguous" in result.errors[0].lower()
    assert attendance_repo.rows == {}


def test_batch_continues_past_row_errors(container, members_repo, attendance_repo):
    lee = members_repo.add("Lee", Part.TENOR)

    result = container.importer.import_rows(
        [
            {"이름": "Lee", "날짜": "2026-02-07", "상태": "O"},
            {"name": "Lee", "date": "2026/02/08", "status": "O"},
            {"name": "Lee", "date": "2026-02-08", "status": "??"},
            {"name": "Ghost", "date": "2026-02-08", "status": "O"},
            {"name": "Lee", "date": "2026-02-14"},
        ]
    )

    assert (result.succeeded, result.failed) == (1, 3)
    assert len(result.errors) == 3
    assert result.message == "1 succeeded, 3 failed"
    assert list(attendance_repo.rows) == [(lee.member_id, date(2026, 2, 7))]


def test_group_hint_disambiguates(container, members_repo, attendance_repo):
    members_repo.add("Kim", Part.SOPRANO_A)
    alto = members_repo.add("Kim", Part.ALTO_A)

    result = container.importer.import_rows([{"name": "Kim", "date": "2026-02-01", "status": "L", "part": "Alto"}])

    assert result.succeeded == 1
    assert attendance_repo.rows[(alto.member_id, date(2026, 2, 1))].status == AttendanceStatus.LATE


def test_reimport_is_idempotent_and_never_deletes(container, members_repo, attendance_repo):
    lee = members_repo.add("Lee", Part.TENOR)
    container.ledger.upsert(lee.member_id, date(2026, 1, 31), "O")
    rows = [
        {"name": "Lee", "date": "2026-02-01", "status": "1"},
        {"name": "Lee", "date": "2026-02-07", "status": "X"},
    ]

    container.importer.import_rows(rows)
    snapshot = dict(attendance_repo.rows)
    container.importer.import_rows(rows)

    assert attendance_repo.rows == snapshot
    assert len(attendance_repo.rows) == 3
    assert attendance_repo.rows[(lee.member_id, date(2026, 2, 7))].status == AttendanceStatus.ABSENT


def test_empty_batch(container):
    result = container.importer.import_rows([])

    assert (result.succeeded, result.failed) == (0, 0)
    assert result.errors == ["No rows to import"]
