import pytest

from src.choir_attendance.choir_attendance.common.rows import cell_text, pick
from src.choir_attendance.choir_attendance.common.validators import canonical_part, normalize_birth_date, require_part
from src.choir_attendance.choir_attendance.core.enums import Part
from src.choir_attendance.choir_attendance.core.exceptions import ValidationError


def test_canonical_part_accepts_display_names_and_synonyms():
    assert canonical_part("Tenor") == Part.TENOR
    assert canonical_part("소프라노 A") == Part.SOPRANO_A
    assert canonical_part("Sop B+") == Part.SOPRANO_B_PLUS
    assert canonical_part("베이스") == Part.BASS
    assert canonical_part("Baritone") is None
    assert canonical_part("") is None


def test_require_part_rejects_unknown():
    with pytest.raises(ValidationError):
        require_part("Baritone")


def test_normalize_birth_date():
    assert normalize_birth_date("1985-03-12") == "850312"
    assert normalize_birth_date("850312") == "850312"
    assert normalize_birth_date(19850312) == "850312"
    assert normalize_birth_date("1234") is None
    assert normalize_birth_date(None) is None


def test_pick_uses_first_non_empty_alias():
    row = {"이름": "", "name": " 김철수 ", "상태": 1.0}

    assert pick(row, ("이름", "name")) == "김철수"
    assert pick(row, ("상태", "status")) == "1"
    assert pick(row, ("파트", "part")) == ""
    assert cell_text(None) == ""
