from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Lifecycle, MemberRole, Part


@dataclass(frozen=True)
class Member:
    """Domain entity: one person on the choir roster.

    Note: plain data object, no DB access. `is_active` is derived from the
    lifecycle so the two can never disagree.
    """

    member_id: int
    name: str
    part: Part
    lifecycle: Lifecycle = Lifecycle.ACTIVE
    role: MemberRole = MemberRole.REGULAR
    church_title: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[str] = None
    lifecycle_changed_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.lifecycle != Lifecycle.WITHDRAWN

    @property
    def is_resting(self) -> bool:
        return self.lifecycle == Lifecycle.RESTING


@dataclass(frozen=True)
class RosterSegments:
    """Active members split for reporting.

    `active` holds everyone counted in rate denominators (NEW included,
    RESTING excluded); `new` is informational and overlaps `active`.
    """

    active: list[Member]
    resting: list[Member]
    new: list[Member]

    @property
    def total(self) -> int:
        return len(self.active) + len(self.resting)
