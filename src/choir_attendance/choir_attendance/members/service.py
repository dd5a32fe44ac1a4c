from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import day_of, now_local
from ..common.rows import pick
from ..common.validators import canonical_part, normalize_birth_date, require_non_empty, require_part
from ..core.constants import DEFAULT_CHURCH_TITLE, MEMBER_HEADERS, MEMBER_STATUS_TOKENS, PART_ALIASES
from ..core.enums import Lifecycle, MemberRole, Part
from ..core.exceptions import AmbiguousMemberError, ValidationError
from ..importing.model import ImportResult
from .model import Member, RosterSegments
from .repository import MemberRepository

logger = logging.getLogger(__name__)


def parse_lifecycle(value: Lifecycle | str) -> Lifecycle:
    if isinstance(value, Lifecycle):
        return value
    try:
        return Lifecycle(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown lifecycle state: {value}")


def parse_role(value: MemberRole | str) -> MemberRole:
    if isinstance(value, MemberRole):
        return value
    try:
        return MemberRole(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown member role: {value}")


def parse_member_status(value: str) -> tuple[Optional[Lifecycle], Optional[MemberRole]]:
    """Roster-sheet status cell (정대원, 신입, 휴식, 솔리스트, ...) to lifecycle and role."""
    key = (value or "").strip().lower()
    if key in MEMBER_STATUS_TOKENS:
        return MEMBER_STATUS_TOKENS[key]
    for token, mapped in MEMBER_STATUS_TOKENS.items():
        if not token.isascii() and token in key:
            return mapped
    raise ValidationError(f"Unknown member status: {value}")


def _check_birth_date(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip() or None
    if value is not None and len(value) != 6:
        raise ValidationError("Birth date must be 6 characters (YYMMDD)")
    return value


class RosterDirectory:
    """Read access to the roster, with composite-group folding."""

    def __init__(self, members: MemberRepository, *, aliases: Optional[dict] = None):
        self._members = members
        self._aliases = PART_ALIASES if aliases is None else aliases

    def get(self, member_id: int) -> Optional[Member]:
        return self._members.get_by_id(int(member_id))

    def resolve_group(self, group: Part | str) -> tuple[Part, ...]:
        """Storage parts behind a display group; empty for unknown names."""
        part = group if isinstance(group, Part) else canonical_part(str(group))
        if part is None:
            return ()
        return tuple(self._aliases.get(part, (part,)))

    def fold_groups(self, groups: Iterable[Part | str]) -> list[Part | str]:
        """Report rows for the requested groups, first occurrence wins.

        Synonyms collapse to their canonical part and alias members collapse to
        the base group, so no member is counted under two rows. Unknown names
        are kept as-is and yield empty rows.
        """
        rows: list[Part | str] = []
        seen: set = set()
        for group in groups:
            parts = self.resolve_group(group)
            row: Part | str = str(group)
            if parts:
                row = next((base for base, members in self._aliases.items() if parts[0] in members), parts[0])
            if row in seen:
                continue
            seen.add(row)
            rows.append(row)
        return rows

    def find_by_group_active(self, group: Part | str) -> list[Member]:
        parts = self.resolve_group(group)
        if not parts:
            logger.debug("Unknown group %r resolved to no parts", group)
            return []
        return [m for m in self._members.list_by_parts(parts, active_only=True) if m.is_active]

    def find_by_name_exact(self, name: str) -> list[Member]:
        name = (name or "").strip()
        if not name:
            return []
        return list(self._members.list_by_name(name))

    @staticmethod
    def segment_by_lifecycle(people: Iterable[Member]) -> RosterSegments:
        active: list[Member] = []
        resting: list[Member] = []
        new: list[Member] = []
        for m in people:
            if not m.is_active:
                continue
            if m.is_resting:
                resting.append(m)
                continue
            active.append(m)
            if m.lifecycle == Lifecycle.NEW:
                new.append(m)
        return RosterSegments(active=active, resting=resting, new=new)

    def list_active(self) -> list[Member]:
        return [m for m in self._members.list_all(active=True) if m.is_active]

    def list_all(self) -> list[Member]:
        return list(self._members.list_all())

    def list_withdrawn(self, start: Optional[date] = None, end: Optional[date] = None) -> list[Member]:
        """Withdrawn members, optionally only those whose last lifecycle change falls in [start, end]."""
        out: list[Member] = []
        for m in self._members.list_all(active=False):
            if m.lifecycle != Lifecycle.WITHDRAWN:
                continue
            if start is not None or end is not None:
                if m.lifecycle_changed_at is None:
                    continue
                changed = day_of(m.lifecycle_changed_at)
                if start is not None and changed < start:
                    continue
                if end is not None and changed > end:
                    continue
            out.append(m)
        return out

    def list_soloists(self) -> list[Member]:
        return [m for m in self._members.list_by_role(MemberRole.SOLOIST, active_only=True) if m.is_active]

    def find_birthdays(self, months: Sequence[int]) -> list[Member]:
        wanted = {int(m) for m in months}
        found = [
            m
            for m in self.list_active()
            if m.birth_date and len(m.birth_date) == 6 and m.birth_date[2:4].isdigit() and int(m.birth_date[2:4]) in wanted
        ]
        found.sort(key=lambda m: (m.birth_date[2:6], m.name))
        return found


class MemberService:
    """Use cases: administrative changes to the roster."""

    def __init__(
        self,
        members: MemberRepository,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._members = members
        self._attendance = attendance
        self._clock = clock

    def _require(self, member_id: int) -> Member:
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise ValidationError("Member does not exist")
        return member

    def add_member(
        self,
        *,
        name: str,
        part: Part | str,
        lifecycle: Lifecycle | str = Lifecycle.NEW,
        role: MemberRole | str = MemberRole.REGULAR,
        church_title: Optional[str] = None,
        phone: Optional[str] = None,
        birth_date: Optional[str] = None,
    ) -> Member:
        name = require_non_empty(name, "Name")
        part = part if isinstance(part, Part) else require_part(part)
        lifecycle = parse_lifecycle(lifecycle)

        member_id = self._members.create_member(
            name=name,
            part=part,
            lifecycle=lifecycle,
            role=parse_role(role),
            church_title=(church_title or "").strip() or DEFAULT_CHURCH_TITLE,
            phone=(phone or "").strip() or None,
            birth_date=_check_birth_date(birth_date),
        )
        logger.info("Added member %s (%s) id=%s", name, part.value, member_id)
        return self._require(member_id)

    def update_member(
        self,
        member_id: int,
        *,
        name: Optional[str] = None,
        part: Optional[Part | str] = None,
        role: Optional[MemberRole | str] = None,
        lifecycle: Optional[Lifecycle | str] = None,
        church_title: Optional[str] = None,
        phone: Optional[str] = None,
        birth_date: Optional[str] = None,
    ) -> Member:
        current = self._require(member_id)

        new_lifecycle = current.lifecycle if lifecycle is None else parse_lifecycle(lifecycle)
        changed_at = current.lifecycle_changed_at
        if new_lifecycle != current.lifecycle:
            changed_at = self._clock()

        updated = Member(
            member_id=current.member_id,
            name=current.name if name is None else require_non_empty(name, "Name"),
            part=current.part if part is None else (part if isinstance(part, Part) else require_part(part)),
            lifecycle=new_lifecycle,
            role=current.role if role is None else parse_role(role),
            church_title=current.church_title if church_title is None else (church_title.strip() or None),
            phone=current.phone if phone is None else (phone.strip() or None),
            birth_date=current.birth_date if birth_date is None else _check_birth_date(birth_date),
            lifecycle_changed_at=changed_at,
        )
        self._members.update_member(updated)
        return updated

    def change_lifecycle(self, member_id: int, lifecycle: Lifecycle | str) -> Member:
        current = self._require(member_id)
        lifecycle = parse_lifecycle(lifecycle)
        if lifecycle == current.lifecycle:
            return current

        self._members.set_lifecycle(current.member_id, lifecycle=lifecycle, changed_at=self._clock())
        logger.info("Member %s lifecycle %s -> %s", current.member_id, current.lifecycle.value, lifecycle.value)
        return self._require(member_id)

    def withdraw(self, member_id: int) -> Member:
        return self.change_lifecycle(member_id, Lifecycle.WITHDRAWN)

    def delete_member(self, member_id: int) -> None:
        """Remove a member and every attendance row that references them."""
        member = self._require(member_id)
        removed = self._attendance.delete_for_member(member.member_id)
        self._members.delete_by_id(member.member_id)
        logger.info("Deleted member %s with %d attendance rows", member.member_id, removed)

    def bulk_update(self, rows: Sequence[Mapping[str, Any]]) -> ImportResult:
        """Apply a roster spreadsheet: update matched members, create unknown ones.

        A row matches by exact name, narrowed by part when several members share
        the name. Bad rows are reported and skipped.
        """
        result = ImportResult()
        for line_no, row in enumerate(rows, start=2):
            name = pick(row, MEMBER_HEADERS["name"])
            if not name:
                continue
            part_raw = pick(row, MEMBER_HEADERS["part"])
            status_raw = pick(row, MEMBER_HEADERS["status"])
            title = pick(row, MEMBER_HEADERS["title"]) or None
            birth_date = normalize_birth_date(pick(row, MEMBER_HEADERS["birth_date"]) or None)

            try:
                part = require_part(part_raw) if part_raw else None
                lifecycle, role = parse_member_status(status_raw) if status_raw else (None, None)
                target = self._match(name, part)
                if target is None:
                    if part is None:
                        raise ValidationError("Part is required to add a new member")
                    self.add_member(
                        name=name,
                        part=part,
                        lifecycle=lifecycle or Lifecycle.NEW,
                        role=role or MemberRole.REGULAR,
                        church_title=title,
                        birth_date=birth_date,
                    )
                else:
                    self.update_member(
                        target.member_id,
                        part=part,
                        lifecycle=lifecycle,
                        role=role,
                        church_title=title,
                        birth_date=birth_date,
                    )
                result.succeeded += 1
            except ValidationError as e:
                message = f"Row {line_no} [{name}] {e}"
                logger.warning("Roster update failed: %s", message)
                result.fail(message)

        logger.info("Roster update finished: %s", result.message)
        return result

    def _match(self, name: str, part: Optional[Part]) -> Optional[Member]:
        candidates = list(self._members.list_by_name(name))
        if len(candidates) > 1 and part is not None:
            candidates = [c for c in candidates if c.part == part]
        if len(candidates) > 1:
            parts = ", ".join(sorted({c.part.value for c in candidates}))
            raise AmbiguousMemberError(f"Ambiguous name (candidates: {parts})")
        return candidates[0] if candidates else None
