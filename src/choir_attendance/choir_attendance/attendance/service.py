from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import day_of, now_local
from ..core.constants import CLEAR_TOKEN
from ..core.enums import AttendanceStatus, Lifecycle, MemberRole, Part
from ..core.exceptions import UnrecognizedStatusError, ValidationError
from ..members.service import RosterDirectory
from .model import AttendanceRecord, SheetRow
from .normalizer import StatusNormalizer
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_SHEET_ORDER = {Lifecycle.ACTIVE: 2, Lifecycle.NEW: 3, Lifecycle.RESTING: 4}


def _sheet_key(row: SheetRow):
    m = row.member
    rank = 1 if m.role == MemberRole.SOLOIST and not m.is_resting else _SHEET_ORDER.get(m.lifecycle, 99)
    return (rank, m.name, m.member_id)


class AttendanceLedger:
    """The authoritative set of attendance facts.

    Every write goes through `upsert`/`clear`, which key on the calendar day
    only, so a (member, day) pair can never hold two records.
    Concurrent writes to the same cell are last-write-wins.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        directory: RosterDirectory,
        normalizer: Optional[StatusNormalizer] = None,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._directory = directory
        self._normalizer = normalizer or StatusNormalizer()
        self._clock = clock

    def _require_member(self, member_id: int) -> None:
        if not self._directory.get(int(member_id)):
            raise ValidationError(f"Member does not exist (id={member_id})")

    def _status(self, status: AttendanceStatus | str) -> AttendanceStatus:
        resolved = self._normalizer.normalize(status)
        if resolved == AttendanceStatus.UNRECOGNIZED:
            raise UnrecognizedStatusError(f"Unknown status value: {status}")
        return resolved

    def upsert(
        self,
        member_id: int,
        day: date | datetime,
        status: AttendanceStatus | str,
        checked_at: Optional[datetime] = None,
    ) -> AttendanceRecord:
        self._require_member(member_id)
        resolved = self._status(status)
        service_date = day_of(day)

        attendance_id = self._attendance.upsert(
            member_id=int(member_id),
            service_date=service_date,
            status=resolved,
            checked_at=checked_at,
        )
        logger.debug("upsert member=%s date=%s status=%s", member_id, service_date, resolved.value)
        return AttendanceRecord(
            attendance_id=attendance_id,
            member_id=int(member_id),
            service_date=service_date,
            status=resolved,
            checked_at=checked_at,
        )

    def clear(self, member_id: int, day: date | datetime) -> bool:
        """Delete the record for that day if there is one; never fails when there is none."""
        removed = self._attendance.delete_for_member_and_date(int(member_id), day_of(day))
        logger.debug("clear member=%s date=%s removed=%s", member_id, day_of(day), removed)
        return removed

    def toggle(
        self,
        member_id: int,
        day: date | datetime,
        status: Optional[AttendanceStatus | str],
    ) -> Optional[AttendanceRecord]:
        """Set a cell from the check sheet; None, '' or 'DELETE' clears it."""
        if status is None or (isinstance(status, str) and status.strip().upper() in ("", CLEAR_TOKEN)):
            self._require_member(member_id)
            self.clear(member_id, day)
            return None
        return self.upsert(member_id, day, status, checked_at=self._clock())

    def find_for_period(
        self,
        member_ids: Optional[Iterable[int]],
        start: date,
        end: date,
    ) -> list[AttendanceRecord]:
        ids = None if member_ids is None else sorted({int(m) for m in member_ids})
        if ids is not None and not ids:
            return []
        return list(self._attendance.list_for_period(start=day_of(start), end=day_of(end), member_ids=ids))

    def part_sheet(self, group: Part | str, day: date | datetime) -> list[SheetRow]:
        members = self._directory.find_by_group_active(group)
        service_date = day_of(day)
        records = {
            r.member_id: r
            for r in self.find_for_period([m.member_id for m in members], service_date, service_date)
        }
        rows = [
            SheetRow(
                member=m,
                status=records[m.member_id].status if m.member_id in records else None,
                checked_at=records[m.member_id].checked_at if m.member_id in records else None,
            )
            for m in members
        ]
        rows.sort(key=_sheet_key)
        return rows
