from __future__ import annotations

from typing import Any, Mapping, Sequence


def cell_text(value: Any) -> str:
    """Spreadsheet cell as stripped text; whole floats lose their '.0'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def pick(row: Mapping[str, Any], aliases: Sequence[str]) -> str:
    """First non-empty value among the accepted header names."""
    for key in aliases:
        value = cell_text(row.get(key))
        if value:
            return value
    return ""
