from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import day_of, month_range, week_range, weekday_bucket
from ..common.rates import percent
from ..core.constants import PARTS
from ..core.enums import AttendanceStatus, Lifecycle, Part, WeekdayBucket
from ..members.model import Member
from ..members.service import RosterDirectory
from ..stats.service import StatisticsAggregator
from .model import (
    DailyGroupReport,
    DailyReport,
    MemberEntry,
    MonthlyCount,
    PeriodReport,
    SoloistCount,
    SoloistReport,
    YearlyReport,
)

logger = logging.getLogger(__name__)

_PART_ORDER = {p: i for i, p in enumerate(Part)}


def _entries(members: Iterable[Member], *, with_changed_at: bool = False) -> list[MemberEntry]:
    return [
        MemberEntry(
            member_id=m.member_id,
            name=m.name,
            part=m.part,
            changed_at=m.lifecycle_changed_at if with_changed_at else None,
        )
        for m in sorted(members, key=lambda m: (_PART_ORDER.get(m.part, 99), m.name))
    ]


class ReportComposer:
    """Shapes aggregator output and lifecycle lists into report objects."""

    def __init__(
        self,
        directory: RosterDirectory,
        ledger: AttendanceLedger,
        aggregator: StatisticsAggregator,
        *,
        groups: Optional[Sequence[Part | str]] = None,
    ):
        self._directory = directory
        self._ledger = ledger
        self._aggregator = aggregator
        self._groups = tuple(directory.fold_groups(PARTS if groups is None else groups))

    def daily(self, day: date | datetime) -> DailyReport:
        day = day_of(day)
        rows = [self._daily_group(g, day) for g in self._groups]

        total = sum(r.total for r in rows)
        present = sum(r.present for r in rows)
        late = sum(r.late for r in rows)
        return DailyReport(
            day=day,
            weekday=weekday_bucket(day),
            total_members=total,
            total_present=present,
            total_late=late,
            rate=percent(present + late, total),
            groups=rows,
        )

    def _daily_group(self, group: Part | str, day: date) -> DailyGroupReport:
        segments = self._directory.segment_by_lifecycle(self._directory.find_by_group_active(group))
        members = sorted(segments.active, key=lambda m: m.name)
        records = {r.member_id: r for r in self._ledger.find_for_period([m.member_id for m in members], day, day)}

        present = 0
        late: list[str] = []
        absent: list[str] = []
        unchecked: list[str] = []
        for m in members:
            record = records.get(m.member_id)
            if record is None:
                unchecked.append(m.name)
            elif record.status == AttendanceStatus.PRESENT:
                present += 1
            elif record.status == AttendanceStatus.LATE:
                late.append(m.name)
            else:
                absent.append(m.name)

        return DailyGroupReport(
            group=group.value if isinstance(group, Part) else str(group),
            total=len(members),
            present=present,
            late=len(late),
            absent=len(absent),
            unchecked=len(unchecked),
            rate=percent(present + len(late), len(members)),
            late_members=late,
            absent_members=absent,
            unchecked_members=unchecked,
            did_not_attend=absent + unchecked,
        )

    def weekly(self, day: date | datetime) -> PeriodReport:
        start, end = week_range(day)
        return self._period("weekly", start, end)

    def monthly(self, year: int, month: int) -> PeriodReport:
        start, end = month_range(year, month)
        return self._period("monthly", start, end)

    def _period(self, kind: str, start: date, end: date) -> PeriodReport:
        statistics = self._aggregator.compute(start, end, self._groups)
        active = self._directory.list_active()
        report = PeriodReport(
            kind=kind,
            start=start,
            end=end,
            statistics=statistics,
            new_members=_entries(m for m in active if m.lifecycle == Lifecycle.NEW),
            resting_members=_entries(m for m in active if m.lifecycle == Lifecycle.RESTING),
            withdrawn_members=_entries(self._directory.list_withdrawn(start, end), with_changed_at=True),
        )
        logger.info("Composed %s report %s..%s (rate %d)", kind, start, end, statistics.overall.rate)
        return report

    def yearly(self, year: int) -> YearlyReport:
        start, _ = month_range(year, 1)
        _, end = month_range(year, 12)
        counts = {m: 0 for m in range(1, 13)}
        for record in self._ledger.find_for_period(None, start, end):
            if record.status.attended and weekday_bucket(record.service_date) != WeekdayBucket.OTHER:
                counts[record.service_date.month] += 1
        return YearlyReport(year=int(year), months=[MonthlyCount(month=m, count=c) for m, c in counts.items()])

    def soloists(self, year: int, month: int) -> SoloistReport:
        start, end = month_range(year, month)
        soloists = sorted(self._directory.list_soloists(), key=lambda m: (_PART_ORDER.get(m.part, 99), m.name))
        counts = self._aggregator.attended_counts([m.member_id for m in soloists], start, end)

        rows = []
        for m in soloists:
            per = counts.get(m.member_id, {})
            sat = per.get(WeekdayBucket.SATURDAY, 0)
            sun = per.get(WeekdayBucket.SUNDAY, 0)
            rows.append(
                SoloistCount(
                    member_id=m.member_id,
                    name=m.name,
                    part=m.part,
                    saturday_count=sat,
                    sunday_count=sun,
                    total=sat + sun,
                )
            )
        return SoloistReport(year=int(year), month=int(month), soloists=rows)
