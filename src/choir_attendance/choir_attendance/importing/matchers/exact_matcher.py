from __future__ import annotations

from typing import Optional

from ...core.enums import Part
from .base import GroupMatcher


class ExactGroupMatcher(GroupMatcher):
    """The hint must name the member's part exactly; applied whenever a hint is present."""

    always_apply = True

    def matches(self, part: Part, hint: str, canonical: Optional[Part]) -> bool:
        if canonical is not None:
            return part == canonical
        return part.value.lower() == hint.strip().lower()
