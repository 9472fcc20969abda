"""Header normalization for loosely-structured CSV files.

Maps arbitrary spreadsheet headers ("Legal Full Name", "Surname",
"Student E-mail", ...) onto semantic fields using one ranked rule table.
"""

from collections.abc import Iterable
from typing import NamedTuple

from roster_match.ingest.schemas import FieldMapping, FieldTag


class HeaderRule(NamedTuple):
    pattern: str
    field: FieldTag
    priority: int


# Ordered: ties between equal priorities keep the earlier rule
HEADER_RULES: tuple[HeaderRule, ...] = (
    # Full name
    HeaderRule("legal full name", FieldTag.FULL_NAME, 10),
    HeaderRule("full name", FieldTag.FULL_NAME, 9),
    HeaderRule("student name", FieldTag.FULL_NAME, 8),
    HeaderRule("participant name", FieldTag.FULL_NAME, 8),
    HeaderRule("complete name", FieldTag.FULL_NAME, 7),
    HeaderRule("display name", FieldTag.FULL_NAME, 7),
    HeaderRule("official name", FieldTag.FULL_NAME, 6),
    HeaderRule("birth name", FieldTag.FULL_NAME, 6),
    HeaderRule("user name", FieldTag.FULL_NAME, 6),
    HeaderRule("registered name", FieldTag.FULL_NAME, 5),
    # First name
    HeaderRule("first name", FieldTag.FIRST_NAME, 9),
    HeaderRule("given name", FieldTag.FIRST_NAME, 8),
    HeaderRule("forename", FieldTag.FIRST_NAME, 7),
    HeaderRule("firstname", FieldTag.FIRST_NAME, 6),
    # Last name
    HeaderRule("last name", FieldTag.LAST_NAME, 9),
    HeaderRule("surname", FieldTag.LAST_NAME, 8),
    HeaderRule("family name", FieldTag.LAST_NAME, 8),
    HeaderRule("lastname", FieldTag.LAST_NAME, 6),
    # Middle name
    HeaderRule("middle name", FieldTag.MIDDLE_NAME, 7),
    HeaderRule("middle initial", FieldTag.MIDDLE_NAME, 6),
    HeaderRule("middlename", FieldTag.MIDDLE_NAME, 5),
    # Email
    HeaderRule("email address", FieldTag.EMAIL, 10),
    HeaderRule("student email", FieldTag.EMAIL, 9),
    HeaderRule("school email", FieldTag.EMAIL, 8),
    HeaderRule("university email", FieldTag.EMAIL, 8),
    HeaderRule("college email", FieldTag.EMAIL, 8),
    HeaderRule("user email", FieldTag.EMAIL, 8),
    HeaderRule("email", FieldTag.EMAIL, 5),
    HeaderRule("e-mail", FieldTag.EMAIL, 4),
    # Phone
    HeaderRule("phone number", FieldTag.PHONE, 8),
    HeaderRule("mobile", FieldTag.PHONE, 7),
    HeaderRule("cell", FieldTag.PHONE, 6),
    HeaderRule("contact number", FieldTag.PHONE, 5),
    # External ID
    HeaderRule("student id", FieldTag.EXTERNAL_ID, 8),
    HeaderRule("student number", FieldTag.EXTERNAL_ID, 7),
    HeaderRule("studentid", FieldTag.EXTERNAL_ID, 6),
    # Grade / cohort
    HeaderRule("grade", FieldTag.GRADE_OR_COHORT, 6),
    HeaderRule("class", FieldTag.GRADE_OR_COHORT, 5),
    HeaderRule("year", FieldTag.GRADE_OR_COHORT, 4),
    HeaderRule("level", FieldTag.GRADE_OR_COHORT, 4),
    HeaderRule("course", FieldTag.GRADE_OR_COHORT, 3),
    # Yes/no flags
    HeaderRule("signed up for class", FieldTag.BOOLEAN_FLAG, 10),
    HeaderRule("signed up", FieldTag.BOOLEAN_FLAG, 8),
    HeaderRule("opted in", FieldTag.BOOLEAN_FLAG, 6),
    # Generic fallbacks
    HeaderRule("name", FieldTag.FULL_NAME, 1),
    HeaderRule("first", FieldTag.FIRST_NAME, 1),
    HeaderRule("last", FieldTag.LAST_NAME, 1),
    HeaderRule("id", FieldTag.EXTERNAL_ID, 1),
    HeaderRule("phone", FieldTag.PHONE, 1),
)

# Headers naming an organization rather than a person
ORGANIZATION_WORDS: tuple[str, ...] = (
    "church",
    "organization",
    "company",
    "institution",
)

# Attendance-export columns kept as opaque fields under a canonical name
ATTENDANCE_COLUMNS: dict[str, str] = {
    "join time": "join_time",
    "join": "join_time",
    "leave time": "leave_time",
    "leave": "leave_time",
    "duration": "duration",
    "duration (minutes)": "duration",
    "time in session (minutes)": "duration",
}


def normalize_header(header: str) -> str:
    return header.strip().lower()


def classify_header(header: str, rules: Iterable[HeaderRule] = HEADER_RULES) -> str:
    """Return the semantic field for a header, or its pass-through name.

    An exact equality with a rule of priority >= 8 wins immediately;
    otherwise the highest-priority substring match wins, first found on
    ties. Full-name rules never apply to organization headers such as
    "Church Name".

    Args:
        header: Raw header text from the file
        rules: Ordered rule table

    Returns:
        FieldTag value, a canonical attendance column name, or the
        normalized header itself
    """
    normalized = normalize_header(header)
    is_organization = any(word in normalized for word in ORGANIZATION_WORDS)

    best: HeaderRule | None = None
    for rule in rules:
        if rule.pattern not in normalized:
            continue
        if rule.field is FieldTag.FULL_NAME and is_organization:
            continue
        if normalized == rule.pattern and rule.priority >= 8:
            return rule.field.value
        if best is None or rule.priority > best.priority:
            best = rule

    if best is not None:
        return best.field.value
    return ATTENDANCE_COLUMNS.get(normalized, normalized)


def build_field_mapping(headers: Iterable[str]) -> FieldMapping:
    """Build the mapping for every distinct header of one file.

    Each header is classified on its own, so the result does not depend
    on column order.
    """
    columns: dict[str, str] = {}
    for header in headers:
        if header not in columns:
            columns[header] = classify_header(header)
    return FieldMapping(columns=columns)
