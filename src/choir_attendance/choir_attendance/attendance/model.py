from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..members.model import Member


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance fact for a (member, calendar day)."""

    attendance_id: int
    member_id: int
    service_date: date
    status: AttendanceStatus
    checked_at: Optional[datetime] = None


@dataclass(frozen=True)
class SheetRow:
    """Read-model for a part's check sheet on one day (status is None when unrecorded)."""

    member: Member
    status: Optional[AttendanceStatus]
    checked_at: Optional[datetime] = None
