from __future__ import annotations

from typing import Optional

from ..common.validators import canonical_part
from ..core.exceptions import AmbiguousMemberError, MemberNotFoundError
from ..members.model import Member
from ..members.service import RosterDirectory
from .matchers.base import GroupMatcher


class MemberResolver:
    """Resolve an imported (name, group hint) pair to exactly one roster member."""

    def __init__(self, directory: RosterDirectory, matcher: GroupMatcher):
        self._directory = directory
        self._matcher = matcher

    def resolve(self, name: str, group_hint: Optional[str] = None) -> Member:
        name = (name or "").strip()
        hint = (group_hint or "").strip()
        candidates = self._directory.find_by_name_exact(name)
        if not candidates:
            raise MemberNotFoundError("Member not found")

        if len(candidates) == 1 and not (hint and self._matcher.always_apply):
            return candidates[0]

        parts = ", ".join(sorted({c.part.value for c in candidates}))
        if not hint:
            raise AmbiguousMemberError(f"Ambiguous name, specify a part (candidates: {parts})")

        canonical = canonical_part(hint)
        matched = [c for c in candidates if self._matcher.matches(c.part, hint, canonical)]
        if len(matched) > 1 and canonical is not None:
            exact = [c for c in matched if c.part == canonical]
            matched = exact or matched
        if len(matched) == 1:
            return matched[0]
        if not matched:
            if len(candidates) == 1:
                raise MemberNotFoundError(f"Part mismatch (found: {parts})")
            raise AmbiguousMemberError(f"Ambiguous name, part mismatch (candidates: {parts})")
        raise AmbiguousMemberError(f"Ambiguous name, several members in part {hint} (candidates: {parts})")
