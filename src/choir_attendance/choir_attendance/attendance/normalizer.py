from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError

# Token -> status. Keys are compared after strip() + upper(); add synonyms here
# or through settings.EXTRA_STATUS_TOKENS, never with extra branches in code.
DEFAULT_STATUS_TOKENS: dict[str, AttendanceStatus] = {
    # present
    "PRESENT": AttendanceStatus.PRESENT,
    "P": AttendanceStatus.PRESENT,
    "O": AttendanceStatus.PRESENT,
    "Y": AttendanceStatus.PRESENT,
    "YES": AttendanceStatus.PRESENT,
    "1": AttendanceStatus.PRESENT,
    "출석": AttendanceStatus.PRESENT,
    "참석": AttendanceStatus.PRESENT,
    # late
    "LATE": AttendanceStatus.LATE,
    "L": AttendanceStatus.LATE,
    "지각": AttendanceStatus.LATE,
    "조퇴": AttendanceStatus.LATE,
    # absent
    "ABSENT": AttendanceStatus.ABSENT,
    "A": AttendanceStatus.ABSENT,
    "X": AttendanceStatus.ABSENT,
    "N": AttendanceStatus.ABSENT,
    "NO": AttendanceStatus.ABSENT,
    "0": AttendanceStatus.ABSENT,
    "2": AttendanceStatus.ABSENT,
    "결석": AttendanceStatus.ABSENT,
    "불참": AttendanceStatus.ABSENT,
    "R": AttendanceStatus.ABSENT,
    "REST": AttendanceStatus.ABSENT,
    "휴식": AttendanceStatus.ABSENT,
}


def _as_status(value: AttendanceStatus | str) -> AttendanceStatus:
    try:
        status = value if isinstance(value, AttendanceStatus) else AttendanceStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown attendance status in token table: {value}")
    if status == AttendanceStatus.UNRECOGNIZED:
        raise ValidationError("Tokens cannot map to UNRECOGNIZED")
    return status


class StatusNormalizer:
    """Maps raw spreadsheet/UI tokens to a canonical AttendanceStatus.

    Total: every input yields PRESENT, LATE, ABSENT or UNRECOGNIZED.
    """

    def __init__(self, table: Optional[Mapping[str, AttendanceStatus | str]] = None):
        source = DEFAULT_STATUS_TOKENS if table is None else table
        self._table = {self._key(k): _as_status(v) for k, v in source.items()}

    @staticmethod
    def _key(raw: object) -> str:
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        return str(raw).strip().upper()

    @property
    def table(self) -> Mapping[str, AttendanceStatus]:
        return MappingProxyType(self._table)

    def with_synonyms(self, mapping: Mapping[str, AttendanceStatus | str]) -> "StatusNormalizer":
        merged: dict[str, AttendanceStatus | str] = dict(self._table)
        merged.update({self._key(k): v for k, v in mapping.items()})
        return StatusNormalizer(merged)

    def normalize(self, raw: object) -> AttendanceStatus:
        if raw is None:
            return AttendanceStatus.UNRECOGNIZED
        if isinstance(raw, AttendanceStatus):
            return raw
        return self._table.get(self._key(raw), AttendanceStatus.UNRECOGNIZED)
