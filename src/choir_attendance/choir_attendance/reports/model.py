from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import Part, WeekdayBucket
from ..stats.model import PeriodStatistics


@dataclass(frozen=True)
class MemberEntry:
    member_id: int
    name: str
    part: Part
    changed_at: Optional[datetime] = None


@dataclass(frozen=True)
class DailyGroupReport:
    """One group's snapshot for a single day.

    `did_not_attend` is absent + unchecked; both count as non-attendance.
    """

    group: str
    total: int
    present: int
    late: int
    absent: int
    unchecked: int
    rate: int
    late_members: list[str] = field(default_factory=list)
    absent_members: list[str] = field(default_factory=list)
    unchecked_members: list[str] = field(default_factory=list)
    did_not_attend: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DailyReport:
    day: date
    weekday: WeekdayBucket
    total_members: int
    total_present: int
    total_late: int
    rate: int
    groups: list[DailyGroupReport] = field(default_factory=list)


@dataclass(frozen=True)
class PeriodReport:
    """Weekly or monthly report: weighted statistics plus lifecycle lists."""

    kind: str
    start: date
    end: date
    statistics: PeriodStatistics
    new_members: list[MemberEntry] = field(default_factory=list)
    resting_members: list[MemberEntry] = field(default_factory=list)
    withdrawn_members: list[MemberEntry] = field(default_factory=list)


@dataclass(frozen=True)
class MonthlyCount:
    month: int
    count: int


@dataclass(frozen=True)
class YearlyReport:
    """Attendance ticks per month. No rates: past roster sizes are not kept."""

    year: int
    months: list[MonthlyCount] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(m.count for m in self.months)


@dataclass(frozen=True)
class SoloistCount:
    member_id: int
    name: str
    part: Part
    saturday_count: int
    sunday_count: int
    total: int


@dataclass(frozen=True)
class SoloistReport:
    year: int
    month: int
    soloists: list[SoloistCount] = field(default_factory=list)
