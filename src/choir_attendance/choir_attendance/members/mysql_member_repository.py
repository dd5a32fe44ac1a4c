from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Lifecycle, MemberRole, Part
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Member
from .repository import MemberRepository

_COLUMNS = "member_id, name, part, lifecycle, role, church_title, phone, birth_date, lifecycle_changed_at"


def _to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        name=r["name"],
        part=Part(r["part"]),
        lifecycle=Lifecycle(r["lifecycle"]),
        role=MemberRole(r["role"]),
        church_title=r.get("church_title"),
        phone=r.get("phone"),
        birth_date=r.get("birth_date"),
        lifecycle_changed_at=r.get("lifecycle_changed_at"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (int(member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def list_by_name(self, name: str) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE name=%s ORDER BY member_id", (name,))
            return [_to_member(r) for r in fetchall(cur)]

    def list_by_parts(self, parts: Sequence[Part], *, active_only: bool = True) -> Sequence[Member]:
        if not parts:
            return []
        clauses = [f"part IN ({in_clause(parts)})"]
        params: list[object] = [p.value for p in parts]
        if active_only:
            clauses.append("is_active=1")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM members WHERE {' AND '.join(clauses)} ORDER BY name, member_id",
                tuple(params),
            )
            return [_to_member(r) for r in fetchall(cur)]

    def list_all(self, *, active: Optional[bool] = None) -> Sequence[Member]:
        where = ""
        params: tuple = ()
        if active is not None:
            where = "WHERE is_active=%s"
            params = (1 if active else 0,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members {where} ORDER BY part, name, member_id", params)
            return [_to_member(r) for r in fetchall(cur)]

    def list_by_role(self, role: MemberRole, *, active_only: bool = True) -> Sequence[Member]:
        clauses = ["role=%s"]
        if active_only:
            clauses.append("is_active=1")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM members WHERE {' AND '.join(clauses)} ORDER BY part, name",
                (role.value,),
            )
            return [_to_member(r) for r in fetchall(cur)]

    def create_member(
        self,
        *,
        name: str,
        part: Part,
        lifecycle: Lifecycle,
        role: MemberRole,
        church_title: Optional[str] = None,
        phone: Optional[str] = None,
        birth_date: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(name, part, lifecycle, role, is_active, church_title, phone, birth_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    name,
                    part.value,
                    lifecycle.value,
                    role.value,
                    0 if lifecycle == Lifecycle.WITHDRAWN else 1,
                    church_title,
                    phone,
                    birth_date,
                ),
            )
            return int(cur.lastrowid)

    def update_member(self, member: Member) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE members
                SET name=%s, part=%s, lifecycle=%s, role=%s, is_active=%s,
                    church_title=%s, phone=%s, birth_date=%s, lifecycle_changed_at=%s
                WHERE member_id=%s
                """,
                (
                    member.name,
                    member.part.value,
                    member.lifecycle.value,
                    member.role.value,
                    1 if member.is_active else 0,
                    member.church_title,
                    member.phone,
                    member.birth_date,
                    member.lifecycle_changed_at,
                    int(member.member_id),
                ),
            )
            return cur.rowcount > 0

    def set_lifecycle(self, member_id: int, *, lifecycle: Lifecycle, changed_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE members
                SET lifecycle=%s, is_active=%s, lifecycle_changed_at=%s
                WHERE member_id=%s
                """,
                (lifecycle.value, 0 if lifecycle == Lifecycle.WITHDRAWN else 1, changed_at, int(member_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE member_id=%s", (int(member_id),))
            return cur.rowcount > 0
