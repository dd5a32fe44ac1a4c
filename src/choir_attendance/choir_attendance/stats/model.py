from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..common.rates import percent
from ..members.model import Member

OVERALL_LABEL = "TOTAL"


@dataclass(frozen=True)
class GroupStatistics:
    """Attendance tallies for one group (or the weighted total) over a period.

    `expected` is active members x service days; resting members are counted
    separately and never enter the rate math.
    """

    group: str
    active_count: int = 0
    resting_count: int = 0
    new_count: int = 0
    present: int = 0
    late: int = 0
    saturday_attended: int = 0
    sunday_attended: int = 0
    saturday_expected: int = 0
    sunday_expected: int = 0
    attended: int = 0
    expected: int = 0
    rate: int = 0
    saturday_rate: int = 0
    sunday_rate: int = 0

    @classmethod
    def build(cls, group: str, **tallies: int) -> "GroupStatistics":
        """Create a row and derive its rates from the tallies."""
        sat_n = tallies.get("saturday_attended", 0)
        sun_n = tallies.get("sunday_attended", 0)
        sat_d = tallies.get("saturday_expected", 0)
        sun_d = tallies.get("sunday_expected", 0)
        return cls(
            group=group,
            attended=sat_n + sun_n,
            expected=sat_d + sun_d,
            rate=percent(sat_n + sun_n, sat_d + sun_d),
            saturday_rate=percent(sat_n, sat_d),
            sunday_rate=percent(sun_n, sun_d),
            **tallies,
        )

    @classmethod
    def combine(cls, rows: list["GroupStatistics"], group: str = OVERALL_LABEL) -> "GroupStatistics":
        """Weighted aggregate: sum numerators and denominators, then divide once."""
        names = (
            "active_count",
            "resting_count",
            "new_count",
            "present",
            "late",
            "saturday_attended",
            "sunday_attended",
            "saturday_expected",
            "sunday_expected",
        )
        return cls.build(group, **{n: sum(getattr(r, n) for r in rows) for n in names})


@dataclass(frozen=True)
class PeriodStatistics:
    start: date
    end: date
    saturday_count: int
    sunday_count: int
    groups: list[GroupStatistics] = field(default_factory=list)
    overall: GroupStatistics = field(default_factory=lambda: GroupStatistics(group=OVERALL_LABEL))

    @property
    def service_day_count(self) -> int:
        return self.saturday_count + self.sunday_count

    def group(self, name: str) -> GroupStatistics:
        for row in self.groups:
            if row.group == name:
                return row
        raise KeyError(name)


@dataclass(frozen=True)
class MemberMonthlyStats:
    member: Member
    year: int
    month: int
    saturday_attended: int
    saturday_total: int
    sunday_attended: int
    sunday_total: int
    rate: int
    saturday_rate: int
    sunday_rate: int
    attended_dates: list[date] = field(default_factory=list)
