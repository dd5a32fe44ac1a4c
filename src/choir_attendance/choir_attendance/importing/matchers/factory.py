from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import GroupMatch
from ...core.exceptions import ValidationError
from .base import GroupMatcher
from .exact_matcher import ExactGroupMatcher
from .prefix_matcher import PrefixGroupMatcher


@dataclass
class GroupMatcherFactory:
    """Factory Pattern: pick the matching rule configured for an import mode."""

    def create(self, mode: GroupMatch | str) -> GroupMatcher:
        try:
            mode = mode if isinstance(mode, GroupMatch) else GroupMatch(str(mode).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown group match mode: {mode}")

        if mode == GroupMatch.EXACT:
            return ExactGroupMatcher()
        return PrefixGroupMatcher()
