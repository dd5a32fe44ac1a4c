from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.normalizer import StatusNormalizer
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .database.connection import DBConfig, DatabaseConnection
from .importing.matchers.factory import GroupMatcherFactory
from .importing.resolver import MemberResolver
from .importing.service import ReconciliationImporter
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService, RosterDirectory
from .reports.service import ReportComposer
from .stats.service import StatisticsAggregator


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    members_repo: MemberRepository
    attendance_repo: AttendanceRepository

    normalizer: StatusNormalizer
    directory: RosterDirectory
    member_service: MemberService
    ledger: AttendanceLedger
    importer: ReconciliationImporter
    aggregator: StatisticsAggregator
    reports: ReportComposer


def wire(
    members_repo: MemberRepository,
    attendance_repo: AttendanceRepository,
    *,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over any repository pair (MySQL in the app, fakes in tests)."""
    extra_tokens = dict(getattr(settings, "EXTRA_STATUS_TOKENS", None) or {})
    normalizer = StatusNormalizer()
    if extra_tokens:
        normalizer = normalizer.with_synonyms(extra_tokens)

    matchers = GroupMatcherFactory()
    row_matcher = matchers.create(getattr(settings, "IMPORT_ROW_GROUP_MATCH", "prefix"))
    matrix_matcher = matchers.create(getattr(settings, "IMPORT_MATRIX_GROUP_MATCH", "exact"))

    directory = RosterDirectory(members_repo)
    member_service = MemberService(members_repo, attendance_repo)
    ledger = AttendanceLedger(attendance_repo, directory, normalizer)
    importer = ReconciliationImporter(
        ledger,
        normalizer,
        row_resolver=MemberResolver(directory, row_matcher),
        matrix_resolver=MemberResolver(directory, matrix_matcher),
    )
    aggregator = StatisticsAggregator(directory, ledger)
    reports = ReportComposer(directory, ledger, aggregator)

    return Container(
        conn=conn,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        normalizer=normalizer,
        directory=directory,
        member_service=member_service,
        ledger=ledger,
        importer=importer,
        aggregator=aggregator,
        reports=reports,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire(
        MySQLMemberRepository(conn),
        MySQLAttendanceRepository(conn),
        settings=settings,
        conn=conn,
    )
