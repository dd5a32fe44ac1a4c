from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Lifecycle, MemberRole, Part
from .model import Member


class MemberRepository(Protocol):
    """Store interface for roster members.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def list_by_name(self, name: str) -> Sequence[Member]:
        raise NotImplementedError

    def list_by_parts(self, parts: Sequence[Part], *, active_only: bool = True) -> Sequence[Member]:
        raise NotImplementedError

    def list_all(self, *, active: Optional[bool] = None) -> Sequence[Member]:
        """All members ordered by part then name; `active` filters on the activation flag."""

        raise NotImplementedError

    def list_by_role(self, role: MemberRole, *, active_only: bool = True) -> Sequence[Member]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_member(self, member: Member) -> bool:
        """Overwrite every mutable field of the stored member with `member`'s values."""

        raise NotImplementedError

    def set_lifecycle(self, member_id: int, *, lifecycle: Lifecycle, changed_at: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError
