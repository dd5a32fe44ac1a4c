from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    service_date = r["service_date"]
    if isinstance(service_date, datetime):
        service_date = service_date.date()
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        member_id=int(r["member_id"]),
        service_date=service_date,
        status=AttendanceStatus(r["status"]),
        checked_at=r.get("checked_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_member_and_date(self, member_id: int, service_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, member_id, service_date, status, checked_at
                FROM attendance_records
                WHERE member_id=%s AND service_date=%s
                """,
                (int(member_id), service_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        member_id: int,
        service_date: date,
        status: AttendanceStatus,
        checked_at: Optional[datetime],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(member_id, service_date, status, checked_at)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), checked_at=VALUES(checked_at)
                """,
                (int(member_id), service_date, status.value, checked_at),
            )

            # If it was an update, lastrowid can be 0; fetch attendance_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE member_id=%s AND service_date=%s",
                (int(member_id), service_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else 0

    def delete_for_member_and_date(self, member_id: int, service_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE member_id=%s AND service_date=%s",
                (int(member_id), service_date),
            )
            return cur.rowcount > 0

    def delete_for_member(self, member_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE member_id=%s", (int(member_id),))
            return int(cur.rowcount)

    def list_for_period(
        self,
        *,
        start: date,
        end: date,
        member_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["service_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]

        if member_ids is not None:
            if not member_ids:
                return []
            clauses.append(f"member_id IN ({in_clause(member_ids)})")
            params.extend(int(m) for m in member_ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, member_id, service_date, status, checked_at
                FROM attendance_records
                WHERE {where}
                ORDER BY service_date ASC, member_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
