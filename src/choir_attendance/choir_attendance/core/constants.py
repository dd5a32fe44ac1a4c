"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

from .enums import MemberRole, Lifecycle, Part

SATURDAY = 5
SUNDAY = 6
SERVICE_WEEKDAYS = (SATURDAY, SUNDAY)

STRICT_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

# Display order used by reports.
PARTS = (
    Part.SOPRANO_A,
    Part.SOPRANO_B,
    Part.ALTO_A,
    Part.ALTO_B,
    Part.TENOR,
    Part.BASS,
)

# A query for the key also returns members stored under every listed part.
PART_ALIASES = {
    Part.SOPRANO_B: (Part.SOPRANO_B, Part.SOPRANO_B_PLUS),
}

# Lookup keys have whitespace removed and are lower-cased.
PART_SYNONYMS = {
    "소프라노a": Part.SOPRANO_A,
    "sopranoa": Part.SOPRANO_A,
    "sopa": Part.SOPRANO_A,
    "소프라노b": Part.SOPRANO_B,
    "sopranob": Part.SOPRANO_B,
    "sopb": Part.SOPRANO_B,
    "소프라노b+": Part.SOPRANO_B_PLUS,
    "sopranob+": Part.SOPRANO_B_PLUS,
    "sopb+": Part.SOPRANO_B_PLUS,
    "알토a": Part.ALTO_A,
    "altoa": Part.ALTO_A,
    "알토b": Part.ALTO_B,
    "altob": Part.ALTO_B,
    "테너": Part.TENOR,
    "tenor": Part.TENOR,
    "베이스": Part.BASS,
    "bass": Part.BASS,
}

# Import header vocabularies: canonical field -> accepted column names.
ROW_HEADERS = {
    "name": ("이름", "name", "Name"),
    "date": ("날짜", "date", "Date"),
    "status": ("상태", "status", "Status"),
    "part": ("파트", "part", "Part"),
}

MEMBER_HEADERS = {
    "name": ("이름", "name", "Name"),
    "part": ("파트", "part", "Part"),
    "status": ("상태", "status", "Status", "State", "role", "Role"),
    "title": ("직분", "title", "Title"),
    "birth_date": ("생년월일", "생년", "birth_date", "BirthDate", "birth"),
}

MEMBER_STATUS_TOKENS = {
    "정대원": (Lifecycle.ACTIVE, MemberRole.REGULAR),
    "regular": (Lifecycle.ACTIVE, MemberRole.REGULAR),
    "신입": (Lifecycle.NEW, None),
    "신입대원": (Lifecycle.NEW, None),
    "new": (Lifecycle.NEW, None),
    "휴식": (Lifecycle.RESTING, None),
    "휴식대원": (Lifecycle.RESTING, None),
    "resting": (Lifecycle.RESTING, None),
    "솔리스트": (Lifecycle.ACTIVE, MemberRole.SOLOIST),
    "soloist": (Lifecycle.ACTIVE, MemberRole.SOLOIST),
}

CLEAR_TOKEN = "DELETE"

DEFAULT_CHURCH_TITLE = "성도"
