from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import day_of, month_range, service_days, weekday_bucket
from ..common.rates import percent
from ..core.constants import PARTS
from ..core.enums import AttendanceStatus, Part, WeekdayBucket
from ..core.exceptions import MemberNotFoundError, ValidationError
from ..members.service import RosterDirectory
from .model import GroupStatistics, MemberMonthlyStats, PeriodStatistics

logger = logging.getLogger(__name__)


def _label(group: Part | str) -> str:
    return group.value if isinstance(group, Part) else str(group)


class StatisticsAggregator:
    """Turns ledger facts into rates over the service calendar.

    A member is expected on every service day of the period; a record counts
    toward the numerator only when it is PRESENT/LATE and falls on a service day.
    """

    def __init__(self, directory: RosterDirectory, ledger: AttendanceLedger):
        self._directory = directory
        self._ledger = ledger

    def compute(
        self,
        start: date,
        end: date,
        groups: Optional[Sequence[Part | str]] = None,
    ) -> PeriodStatistics:
        start, end = day_of(start), day_of(end)
        if start > end:
            raise ValidationError("Start date must not be after end date")

        days = service_days(start, end)
        saturdays = sum(1 for d in days if weekday_bucket(d) == WeekdayBucket.SATURDAY)
        sundays = len(days) - saturdays

        requested = PARTS if groups is None else groups
        rows = [self._group_stats(g, start, end, saturdays, sundays) for g in self._directory.fold_groups(requested)]
        overall = GroupStatistics.combine(rows)
        logger.debug("Stats %s..%s: %d groups, overall rate %d", start, end, len(rows), overall.rate)
        return PeriodStatistics(
            start=start,
            end=end,
            saturday_count=saturdays,
            sunday_count=sundays,
            groups=rows,
            overall=overall,
        )

    def _group_stats(self, group: Part | str, start: date, end: date, saturdays: int, sundays: int) -> GroupStatistics:
        segments = self._directory.segment_by_lifecycle(self._directory.find_by_group_active(group))
        counted = len(segments.active)
        tallies = dict(
            active_count=counted,
            resting_count=len(segments.resting),
            new_count=len(segments.new),
            present=0,
            late=0,
            saturday_attended=0,
            sunday_attended=0,
            saturday_expected=counted * saturdays,
            sunday_expected=counted * sundays,
        )

        for record in self._ledger.find_for_period([m.member_id for m in segments.active], start, end):
            if not record.status.attended:
                continue
            bucket = weekday_bucket(record.service_date)
            if bucket == WeekdayBucket.OTHER:
                continue
            tallies["present" if record.status == AttendanceStatus.PRESENT else "late"] += 1
            tallies["saturday_attended" if bucket == WeekdayBucket.SATURDAY else "sunday_attended"] += 1

        return GroupStatistics.build(_label(group), **tallies)

    def member_month_stats(self, member_id: int, year: int, month: int) -> MemberMonthlyStats:
        member = self._directory.get(member_id)
        if not member:
            raise MemberNotFoundError("Member not found")

        start, end = month_range(year, month)
        days = service_days(start, end)
        sat_total = sum(1 for d in days if weekday_bucket(d) == WeekdayBucket.SATURDAY)
        sun_total = len(days) - sat_total

        attended = sorted(
            r.service_date
            for r in self._ledger.find_for_period([member.member_id], start, end)
            if r.status.attended and weekday_bucket(r.service_date) != WeekdayBucket.OTHER
        )
        sat = sum(1 for d in attended if weekday_bucket(d) == WeekdayBucket.SATURDAY)
        sun = len(attended) - sat

        return MemberMonthlyStats(
            member=member,
            year=int(year),
            month=int(month),
            saturday_attended=sat,
            saturday_total=sat_total,
            sunday_attended=sun,
            sunday_total=sun_total,
            rate=percent(sat + sun, sat_total + sun_total),
            saturday_rate=percent(sat, sat_total),
            sunday_rate=percent(sun, sun_total),
            attended_dates=attended,
        )

    def attended_counts(self, member_ids: Iterable[int], start: date, end: date) -> dict[int, dict[WeekdayBucket, int]]:
        """PRESENT/LATE service-day counts per member, split by weekday bucket."""
        counts: dict[int, dict[WeekdayBucket, int]] = {}
        for record in self._ledger.find_for_period(member_ids, start, end):
            bucket = weekday_bucket(record.service_date)
            if not record.status.attended or bucket == WeekdayBucket.OTHER:
                continue
            per = counts.setdefault(record.member_id, {WeekdayBucket.SATURDAY: 0, WeekdayBucket.SUNDAY: 0})
            per[bucket] += 1
        return counts
