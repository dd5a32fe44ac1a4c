from __future__ import annotations

from typing import Optional

from ...core.enums import Part
from .base import GroupMatcher


class PrefixGroupMatcher(GroupMatcher):
    """The member's part equals the hint or starts with it ("Sop" matches "Soprano A")."""

    def matches(self, part: Part, hint: str, canonical: Optional[Part]) -> bool:
        if canonical is not None and part == canonical:
            return True
        token = hint.strip().lower()
        return bool(token) and part.value.lower().startswith(token)
