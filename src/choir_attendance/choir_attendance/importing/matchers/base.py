from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import Part


class GroupMatcher(ABC):
    """Strategy Pattern: decide whether a member's part satisfies a group hint from an import row."""

    # When False the hint is consulted only if the name is shared by several members.
    always_apply: bool = False

    @abstractmethod
    def matches(self, part: Part, hint: str, canonical: Optional[Part]) -> bool:
        raise NotImplementedError
