from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Store interface for attendance facts, keyed by (member_id, service_date)."""

    def get_for_member_and_date(self, member_id: int, service_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        member_id: int,
        service_date: date,
        status: AttendanceStatus,
        checked_at: Optional[datetime],
    ) -> int:
        """Insert the fact or overwrite status/checked_at of the existing one.

        Returns attendance_id.
        """

        raise NotImplementedError

    def delete_for_member_and_date(self, member_id: int, service_date: date) -> bool:
        raise NotImplementedError

    def delete_for_member(self, member_id: int) -> int:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        start: date,
        end: date,
        member_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceRecord]:
        """Inclusive range scan ordered by service_date then member_id."""

        raise NotImplementedError
