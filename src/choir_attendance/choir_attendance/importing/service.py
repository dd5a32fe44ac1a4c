from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Mapping, Optional, Sequence

from ..attendance.normalizer import StatusNormalizer
from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import is_date_token, parse_strict_date
from ..common.rows import cell_text, pick
from ..core.constants import ROW_HEADERS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ImportFormatError, UnrecognizedStatusError, ValidationError
from .model import ImportResult
from .resolver import MemberResolver

logger = logging.getLogger(__name__)

# Imported facts carry local noon as their check time.
IMPORT_CHECK_TIME = time(12, 0)


class ReconciliationImporter:
    """Reconciles external attendance batches against the roster.

    Both shapes funnel through resolve -> normalize -> ledger upsert, so
    re-importing a batch leaves the ledger unchanged. Nothing is ever deleted.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        normalizer: StatusNormalizer,
        *,
        row_resolver: MemberResolver,
        matrix_resolver: MemberResolver,
    ):
        self._ledger = ledger
        self._normalizer = normalizer
        self._row_resolver = row_resolver
        self._matrix_resolver = matrix_resolver

    def _status(self, raw: Any) -> AttendanceStatus:
        status = self._normalizer.normalize(raw)
        if status == AttendanceStatus.UNRECOGNIZED:
            raise UnrecognizedStatusError(f"Unknown status value: {raw}")
        return status

    def import_rows(self, rows: Sequence[Mapping[str, Any]]) -> ImportResult:
        """Row mode: one (name, date, status[, part]) fact per row.

        Rows missing name, date or status are treated as blank lines and skipped.
        """
        result = ImportResult()
        if not rows:
            result.errors.append("No rows to import")
            return result

        for row in rows:
            name = pick(row, ROW_HEADERS["name"])
            date_s = pick(row, ROW_HEADERS["date"])
            status_raw = pick(row, ROW_HEADERS["status"])
            part = pick(row, ROW_HEADERS["part"])
            if not name or not date_s or not status_raw:
                continue

            try:
                day = parse_strict_date(date_s)
                status = self._status(status_raw)
                member = self._row_resolver.resolve(name, part or None)
                self._ledger.upsert(member.member_id, day, status, datetime.combine(day, IMPORT_CHECK_TIME))
                result.succeeded += 1
            except ValidationError as e:
                message = f"[{name}, {date_s}] {e}"
                logger.warning("Row import failed: %s", message)
                result.fail(message)

        logger.info("Row import finished: %s", result.message)
        return result

    def import_matrix(self, rows: Sequence[Sequence[Any]]) -> ImportResult:
        """Matrix mode: header row, then one row per member and one column per date.

        Columns whose header is a YYYY-MM-DD token are date columns; every other
        column is ignored apart from the name and part columns. Empty cells are
        "not recorded" and create nothing.
        """
        if not rows or len(rows) < 2:
            raise ImportFormatError("No data rows")

        header = [cell_text(h) if not isinstance(h, date) else h for h in rows[0]]
        name_idx = self._header_index(header, ROW_HEADERS["name"], default=0)
        # Positional fallback only applies to headers with no recognizable names.
        labelled = any(isinstance(h, str) and h in aliases for aliases in ROW_HEADERS.values() for h in header)
        part_idx = self._header_index(header, ROW_HEADERS["part"], default=None if labelled else 1)
        date_columns = self._date_columns(header)
        if not date_columns:
            raise ImportFormatError("No date columns (YYYY-MM-DD) found")
        if part_idx == name_idx or part_idx in {idx for idx, _ in date_columns}:
            part_idx = None

        result = ImportResult()
        for line_no, row in enumerate(rows[1:], start=2):
            name = cell_text(row[name_idx]) if name_idx < len(row) else ""
            if not name:
                continue
            part = cell_text(row[part_idx]) if part_idx is not None and part_idx < len(row) else ""

            try:
                member = self._matrix_resolver.resolve(name, part or None)
            except ValidationError as e:
                message = f"Row {line_no} [{name}] {e}"
                logger.warning("Matrix import failed: %s", message)
                result.fail(message)
                continue

            for idx, day in date_columns:
                raw = cell_text(row[idx]) if idx < len(row) else ""
                if not raw:
                    continue
                try:
                    status = self._status(raw)
                    self._ledger.upsert(member.member_id, day, status, datetime.combine(day, IMPORT_CHECK_TIME))
                    result.succeeded += 1
                except ValidationError as e:
                    message = f"Row {line_no} [{name}, {day.isoformat()}] {e}"
                    logger.warning("Matrix import failed: %s", message)
                    result.fail(message)

        logger.info("Matrix import finished: %s (%d date columns)", result.message, len(date_columns))
        return result

    @staticmethod
    def _header_index(header: list, aliases: Sequence[str], *, default: Optional[int]) -> Optional[int]:
        for idx, value in enumerate(header):
            if isinstance(value, str) and value in aliases:
                return idx
        return default

    @staticmethod
    def _date_columns(header: list) -> list[tuple[int, date]]:
        columns: list[tuple[int, date]] = []
        for idx, value in enumerate(header):
            if isinstance(value, datetime):
                columns.append((idx, value.date()))
            elif isinstance(value, date):
                columns.append((idx, value))
            elif is_date_token(value):
                try:
                    columns.append((idx, parse_strict_date(value)))
                except ValidationError:
                    logger.warning("Ignoring impossible date column %r", value)
        return columns
