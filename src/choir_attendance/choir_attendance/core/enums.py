from __future__ import annotations

from enum import Enum


class Part(str, Enum):
    """Voice sections a member can belong to."""

    SOPRANO_A = "Soprano A"
    SOPRANO_B = "Soprano B"
    SOPRANO_B_PLUS = "Soprano B+"
    ALTO_A = "Alto A"
    ALTO_B = "Alto B"
    TENOR = "Tenor"
    BASS = "Bass"


class Lifecycle(str, Enum):
    """Membership lifecycle. Only WITHDRAWN removes a member from active rosters."""

    ACTIVE = "ACTIVE"
    NEW = "NEW"
    RESTING = "RESTING"
    WITHDRAWN = "WITHDRAWN"


class MemberRole(str, Enum):
    REGULAR = "REGULAR"
    SOLOIST = "SOLOIST"


class AttendanceStatus(str, Enum):
    """Canonical attendance status stored in the ledger.

    UNRECOGNIZED is only ever produced by the normalizer and is never stored.
    """

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    UNRECOGNIZED = "UNRECOGNIZED"

    @property
    def attended(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class WeekdayBucket(str, Enum):
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"
    OTHER = "OTHER"


class GroupMatch(str, Enum):
    """How an import row's group hint is compared with a member's part."""

    EXACT = "exact"
    PREFIX = "prefix"
