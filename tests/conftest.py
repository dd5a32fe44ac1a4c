from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

import pytest

from src.choir_attendance.choir_attendance.attendance.model import AttendanceRecord
from src.choir_attendance.choir_attendance.container import Container, wire
from src.choir_attendance.choir_attendance.core.enums import AttendanceStatus, Lifecycle, MemberRole, Part
from src.choir_attendance.choir_attendance.members.model import Member


class InMemoryMembers:
    def __init__(self):
        self.by_id: dict[int, Member] = {}
        self._id = 0

    def add(self, name: str, part: Part, **kwargs) -> Member:
        self._id += 1
        member = Member(member_id=self._id, name=name, part=part, **kwargs)
        self.by_id[member.member_id] = member
        return member

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self.by_id.get(member_id)

    def list_by_name(self, name: str) -> Sequence[Member]:
        return [m for m in self.by_id.values() if m.name == name]

    def list_by_parts(self, parts: Sequence[Part], *, active_only: bool = True) -> Sequence[Member]:
        return [m for m in self.by_id.values() if m.part in parts and (m.is_active or not active_only)]

    def list_all(self, *, active: Optional[bool] = None) -> Sequence[Member]:
        return [m for m in self.by_id.values() if active is None or m.is_active == active]

    def list_by_role(self, role: MemberRole, *, active_only: bool = True) -> Sequence[Member]:
        return [m for m in self.by_id.values() if m.role == role and (m.is_active or not active_only)]

    def create_member(self, *, name, part, lifecycle, role, church_title, phone, birth_date) -> int:
        member = self.add(
            name,
            part,
            lifecycle=lifecycle,
            role=role,
            church_title=church_title,
            phone=phone,
            birth_date=birth_date,
        )
        return member.member_id

    def update_member(self, member: Member) -> bool:
        if member.member_id not in self.by_id:
            return False
        self.by_id[member.member_id] = member
        return True

    def set_lifecycle(self, member_id: int, *, lifecycle: Lifecycle, changed_at: datetime) -> bool:
        current = self.by_id.get(member_id)
        if not current:
            return False
        self.by_id[member_id] = replace(current, lifecycle=lifecycle, lifecycle_changed_at=changed_at)
        return True

    def delete_by_id(self, member_id: int) -> bool:
        return self.by_id.pop(member_id, None) is not None


class InMemoryAttendance:
    """Keyed by (member_id, day) like the UNIQUE constraint in schema.sql."""

    def __init__(self):
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_member_and_date(self, member_id: int, service_date: date) -> Optional[AttendanceRecord]:
        return self.rows.get((member_id, service_date))

    def upsert(self, *, member_id: int, service_date: date, status: AttendanceStatus, checked_at) -> int:
        existing = self.rows.get((member_id, service_date))
        if existing:
            attendance_id = existing.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        self.rows[(member_id, service_date)] = AttendanceRecord(
            attendance_id=attendance_id,
            member_id=member_id,
            service_date=service_date,
            status=status,
            checked_at=checked_at,
        )
        return attendance_id

    def delete_for_member_and_date(self, member_id: int, service_date: date) -> bool:
        return self.rows.pop((member_id, service_date), None) is not None

    def delete_for_member(self, member_id: int) -> int:
        keys = [k for k in self.rows if k[0] == member_id]
        for k in keys:
            del self.rows[k]
        return len(keys)

    def list_for_period(self, *, start: date, end: date, member_ids=None):
        items = [
            r
            for r in self.rows.values()
            if start <= r.service_date <= end
            and (member_ids is None or r.member_id in member_ids)
        ]
        items.sort(key=lambda r: (r.service_date, r.member_id))
        return items


class Settings:
    IMPORT_ROW_GROUP_MATCH = "prefix"
    IMPORT_MATRIX_GROUP_MATCH = "exact"
    EXTRA_STATUS_TOKENS: dict = {}


@pytest.fixture
def members_repo() -> InMemoryMembers:
    return InMemoryMembers()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(members_repo, attendance_repo) -> Container:
    return wire(members_repo, attendance_repo, settings=Settings())
