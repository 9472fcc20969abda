"""Row validation: turn raw CSV rows into typed external records.

Rows are validated once here; everything downstream works on
Participant / RosterEntry records, never on raw dicts.
"""

import re
from collections import Counter
from collections.abc import Sequence

import structlog

from roster_match.identity.schemas import ExternalRecord, Participant, RosterEntry
from roster_match.ingest.schemas import (
    FieldMapping,
    FieldTag,
    ImportResult,
    RawRow,
    RecordKind,
)

logger = structlog.get_logger()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TRUE_VALUES = frozenset({"yes", "true", "1", "y"})

_PARENTHESES = re.compile(r"\(.*?\)")
_WHITESPACE = re.compile(r"\s+")

_ATTENDANCE_FIELDS = ("join_time", "leave_time", "duration")


class InvalidEmailError(ValueError):
    """A row carries an email that is not shaped like local@domain.tld."""


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def parse_flag(value: str | None) -> bool:
    """Parse a yes/no cell: yes/true/1/y (any case) are true, all else false."""
    return (value or "").strip().lower() in TRUE_VALUES


def build_name(fields: dict[FieldTag, str]) -> str:
    """Resolve a display name from whichever name columns are filled.

    Order: full name, then "first [middle] last" (a middle value of one
    or two characters is written as an initial), then first alone, then
    last alone.
    """
    full = fields.get(FieldTag.FULL_NAME, "")
    if full:
        return full

    first = fields.get(FieldTag.FIRST_NAME, "")
    last = fields.get(FieldTag.LAST_NAME, "")
    middle = fields.get(FieldTag.MIDDLE_NAME, "")

    if first and last:
        if not middle:
            return f"{first} {last}"
        if len(middle) <= 2:
            return f"{first} {middle}. {last}"
        return f"{first} {middle} {last}"

    return first or last


def clean_display_name(name: str) -> str:
    """Drop parenthesised annotations such as pronouns or "(Host)"."""
    return _WHITESPACE.sub(" ", _PARENTHESES.sub("", name)).strip()


def split_row(
    row: RawRow, mapping: FieldMapping
) -> tuple[dict[FieldTag, str], dict[str, str]]:
    """Split a raw row into semantic fields and opaque extra columns.

    When several columns map to the same field, the first non-blank one
    in file order wins.
    """
    fields: dict[FieldTag, str] = {}
    extra: dict[str, str] = {}
    for header, value in row.items():
        text = (value or "").strip()
        tag = mapping.tag_for(header)
        if tag is None:
            key = mapping.columns.get(header, header.strip().lower())
            if text or key not in extra:
                extra[key] = text
        elif text and tag not in fields:
            fields[tag] = text
    return fields, extra


def build_record(
    row: RawRow,
    mapping: FieldMapping,
    kind: RecordKind,
) -> ExternalRecord | None:
    """Build one typed record from a raw row.

    Args:
        row: Raw CSV row
        mapping: Header mapping for the file
        kind: Participant (attendance) or roster row

    Returns:
        The record, or None if the row lacks the name/email it needs

    Raises:
        InvalidEmailError: If an email is present but malformed
    """
    fields, extra = split_row(row, mapping)
    name = build_name(fields)
    email = fields.get(FieldTag.EMAIL, "").lower()

    if kind is RecordKind.PARTICIPANT:
        name = clean_display_name(name)

    if not name and not email:
        return None

    if email and not is_valid_email(email):
        raise InvalidEmailError(f"Invalid email format: {email}")

    # Roster rows need both; attendance rows stay reviewable with either
    if kind is RecordKind.ROSTER and not (name and email):
        return None

    common = {
        "name": name,
        "email": email or None,
        "phone": fields.get(FieldTag.PHONE),
        "external_id": fields.get(FieldTag.EXTERNAL_ID),
        "cohort": fields.get(FieldTag.GRADE_OR_COHORT),
        "flag": (
            parse_flag(fields.get(FieldTag.BOOLEAN_FLAG))
            if mapping.headers_for(FieldTag.BOOLEAN_FLAG)
            else None
        ),
    }

    if kind is RecordKind.PARTICIPANT:
        attendance = {key: extra.pop(key, "") or None for key in _ATTENDANCE_FIELDS}
        return Participant(**common, **attendance, extra=extra)

    return RosterEntry(
        **common,
        first_name=fields.get(FieldTag.FIRST_NAME),
        middle_name=fields.get(FieldTag.MIDDLE_NAME),
        last_name=fields.get(FieldTag.LAST_NAME),
        extra=extra,
    )


def find_duplicates(records: Sequence[ExternalRecord]) -> list[str]:
    """Warn about repeated emails (case-insensitive) and repeated names.

    Duplicates are reported, not removed.
    """
    emails = Counter(r.email.lower() for r in records if r.email)
    names = Counter(" ".join(r.name.lower().split()) for r in records if r.name)

    warnings = [
        f"Duplicate email found: {email} ({count} times)"
        for email, count in emails.items()
        if count > 1
    ]
    warnings.extend(
        f"Duplicate name found: {name} ({count} times)"
        for name, count in names.items()
        if count > 1
    )
    return warnings


def build_records(
    rows: Sequence[RawRow],
    mapping: FieldMapping,
    kind: RecordKind,
) -> ImportResult:
    """Validate every row of a file and collect records, errors and warnings.

    Args:
        rows: Raw CSV rows in file order
        mapping: Header mapping for the file
        kind: Participant (attendance) or roster file

    Returns:
        ImportResult; rows with malformed emails become per-row errors,
        rows missing required data are only counted
    """
    result = ImportResult(kind=kind, field_mapping=mapping)

    for index, row in enumerate(rows, start=1):
        try:
            record = build_record(row, mapping, kind)
        except InvalidEmailError as e:
            result.errors.append(f"Row {index}: {e}")
            continue
        if record is None:
            result.skipped_rows += 1
        else:
            result.records.append(record)

    if result.skipped_rows:
        result.warnings.append(
            f"{result.skipped_rows} rows were skipped due to missing name or email"
        )

    if not result.records:
        result.warnings.append("No valid records found in CSV file")
        return result

    result.warnings.extend(find_duplicates(result.records))

    if kind is RecordKind.PARTICIPANT:
        no_email = sum(1 for r in result.records if not r.email)
        no_name = sum(1 for r in result.records if not r.name)
        if no_email:
            result.warnings.append(f"{no_email} participants have no email address")
        if no_name:
            result.warnings.append(f"{no_name} participants have no name")

    logger.info(
        "Built records from CSV rows",
        kind=kind.value,
        rows=len(rows),
        records=len(result.records),
        skipped=result.skipped_rows,
        errors=len(result.errors),
    )
    return result
