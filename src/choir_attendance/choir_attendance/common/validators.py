from __future__ import annotations

import re
from typing import Optional

from ..core.constants import PART_SYNONYMS
from ..core.enums import Part
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def canonical_part(value: str) -> Optional[Part]:
    """Map a free-text part name (any supported spelling) to a Part, or None."""
    text = (value or "").strip()
    if not text:
        return None
    try:
        return Part(text)
    except ValueError:
        pass
    return PART_SYNONYMS.get(re.sub(r"\s+", "", text).lower())


def require_part(value: str) -> Part:
    part = canonical_part(value)
    if part is None:
        raise ValidationError(f"Unknown part: {value}")
    return part


def normalize_birth_date(value: object) -> Optional[str]:
    """Reduce a birth date to YYMMDD digits.

    Eight digits (YYYYMMDD) lose their century; anything that is not six or
    eight digits after stripping separators is dropped.
    """
    if value is None:
        return None
    digits = re.sub(r"[^0-9]", "", str(value))
    if len(digits) == 8:
        return digits[2:]
    if len(digits) == 6:
        return digits
    return None
