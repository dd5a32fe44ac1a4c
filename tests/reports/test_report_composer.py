from datetime import date, datetime

from src.choir_attendance.choir_attendance.core.enums import Lifecycle, MemberRole, Part, WeekdayBucket
from src.choir_attendance.choir_attendance.reports.service import ReportComposer


def test_daily_report_separates_absent_and_unchecked(container, members_repo):
    ann = members_repo.add("Ann", Part.TENOR)
    ben = members_repo.add("Ben", Part.TENOR)
    cat = members_repo.add("Cat", Part.TENOR)
    members_repo.add("Dan", Part.TENOR)
    resting = members_repo.add("Eve", Part.TENOR, lifecycle=Lifecycle.RESTING)
    day = date(2026, 2, 8)
    container.ledger.upsert(ann.member_id, day, "O")
    container.ledger.upsert(ben.member_id, day, "L")
    container.ledger.upsert(cat.member_id, day, "X")
    container.ledger.upsert(resting.member_id, day, "O")

    report = container.reports.daily(day)
    tenor = next(g for g in report.groups if g.group == "Tenor")

    assert report.weekday == WeekdayBucket.SUNDAY
    assert (tenor.total, tenor.present, tenor.late, tenor.absent, tenor.unchecked) == (4, 1, 1, 1, 1)
    assert tenor.rate == 50
    assert tenor.late_members == ["Ben"]
    assert tenor.absent_members == ["Cat"]
    assert tenor.unchecked_members == ["Dan"]
    assert tenor.did_not_attend == ["Cat", "Dan"]
    assert (report.total_members, report.total_present, report.total_late, report.rate) == (4, 1, 1, 50)


def test_weekly_report_uses_monday_to_sunday_and_lists_lifecycle(container, members_repo):
    members_repo.add("Ann", Part.TENOR)
    members_repo.add("Newbie", Part.ALTO_A, lifecycle=Lifecycle.NEW)
    members_repo.add("Rest", Part.BASS, lifecycle=Lifecycle.RESTING)
    gone = members_repo.add(
        "Gone", Part.BASS, lifecycle=Lifecycle.WITHDRAWN, lifecycle_changed_at=datetime(2026, 2, 10, 9, 0)
    )
    members_repo.add("Older", Part.BASS, lifecycle=Lifecycle.WITHDRAWN, lifecycle_changed_at=datetime(2026, 1, 5))

    report = container.reports.weekly(date(2026, 2, 11))

    assert (report.start, report.end) == (date(2026, 2, 9), date(2026, 2, 15))
    assert (report.statistics.saturday_count, report.statistics.sunday_count) == (1, 1)
    assert [e.name for e in report.new_members] == ["Newbie"]
    assert [e.name for e in report.resting_members] == ["Rest"]
    assert [(e.member_id, e.changed_at) for e in report.withdrawn_members] == [
        (gone.member_id, datetime(2026, 2, 10, 9, 0))
    ]


def test_monthly_report_overall_is_weighted(container, members_repo):
    solo = members_repo.add("Solo", Part.TENOR)
    for d in (date(2026, 2, 1), date(2026, 2, 7), date(2026, 2, 8), date(2026, 2, 14)):
        container.ledger.upsert(solo.member_id, d, "O")
    for i in range(3):
        members_repo.add(f"B{i}", Part.BASS)

    report = container.reports.monthly(2026, 2)

    assert report.kind == "monthly"
    assert report.statistics.group("Tenor").rate == 50
    assert report.statistics.group("Bass").rate == 0
    assert report.statistics.overall.rate == 13


def test_yearly_report_counts_attendance_on_service_days(container, members_repo):
    ann = members_repo.add("Ann", Part.TENOR)
    gone = members_repo.add("Gone", Part.TENOR, lifecycle=Lifecycle.WITHDRAWN)
    container.ledger.upsert(ann.member_id, date(2026, 2, 7), "O")
    container.ledger.upsert(ann.member_id, date(2026, 2, 10), "O")
    container.ledger.upsert(ann.member_id, date(2026, 3, 1), "X")
    container.ledger.upsert(ann.member_id, date(2026, 3, 7), "L")
    container.ledger.upsert(gone.member_id, date(2026, 2, 8), "O")

    report = container.reports.yearly(2026)

    assert len(report.months) == 12
    assert report.months[1].count == 2
    assert report.months[2].count == 1
    assert report.total == 3


def test_soloist_report_counts_saturdays_and_sundays(container, members_repo):
    solo = members_repo.add("Solo", Part.TENOR, role=MemberRole.SOLOIST)
    idle = members_repo.add("Idle", Part.SOPRANO_A, role=MemberRole.SOLOIST)
    regular = members_repo.add("Reg", Part.TENOR)
    for d, token in (
        (date(2026, 2, 7), "O"),
        (date(2026, 2, 14), "O"),
        (date(2026, 2, 8), "L"),
        (date(2026, 2, 15), "X"),
        (date(2026, 2, 10), "O"),
    ):
        container.ledger.upsert(solo.member_id, d, token)
    container.ledger.upsert(regular.member_id, date(2026, 2, 7), "O")

    report = container.reports.soloists(2026, 2)

    assert [r.member_id for r in report.soloists] == [idle.member_id, solo.member_id]
    idle_row, solo_row = report.soloists
    assert (solo_row.saturday_count, solo_row.sunday_count, solo_row.total) == (2, 1, 3)
    assert (idle_row.saturday_count, idle_row.sunday_count, idle_row.total) == (0, 0, 0)


def test_configured_groups_fold_overlaps_and_allow_empty(container, members_repo):
    base = members_repo.add("Base", Part.SOPRANO_B)
    members_repo.add("Plus", Part.SOPRANO_B_PLUS)
    day = date(2026, 2, 8)
    container.ledger.upsert(base.member_id, day, "O")

    folded = ReportComposer(
        container.directory, container.ledger, container.aggregator, groups=["Soprano B", "Soprano B+"]
    ).daily(day)
    empty = ReportComposer(container.directory, container.ledger, container.aggregator, groups=[]).daily(day)

    assert [g.group for g in folded.groups] == ["Soprano B"]
    assert (folded.total_members, folded.total_present, folded.rate) == (2, 1, 50)
    assert empty.groups == []
    assert (empty.total_members, empty.rate) == (0, 0)
