"""Tests for row validation and record building."""

import pytest

from roster_match.identity.schemas import Participant, RosterEntry
from roster_match.ingest.builder import (
    build_name,
    build_record,
    build_records,
    find_duplicates,
    parse_flag,
)
from roster_match.ingest.headers import build_field_mapping
from roster_match.ingest.schemas import FieldTag, RecordKind


def _rows(headers: list[str], *values: list[str]) -> list[dict[str, str]]:
    return [dict(zip(headers, v, strict=True)) for v in values]


class TestBuildName:
    """Tests for the name fallback chain."""

    def test_full_name_wins(self):
        fields = {FieldTag.FULL_NAME: "Bob Jones", FieldTag.FIRST_NAME: "Robert"}

        assert build_name(fields) == "Bob Jones"

    def test_first_and_last_combined(self):
        fields = {FieldTag.FIRST_NAME: "Ada", FieldTag.LAST_NAME: "Lovelace"}

        assert build_name(fields) == "Ada Lovelace"

    def test_short_middle_is_initial(self):
        """A middle value of up to two characters gets a trailing period."""
        fields = {
            FieldTag.FIRST_NAME: "John",
            FieldTag.MIDDLE_NAME: "Q",
            FieldTag.LAST_NAME: "Public",
        }

        assert build_name(fields) == "John Q. Public"

    def test_long_middle_spelled_out(self):
        fields = {
            FieldTag.FIRST_NAME: "Matthew",
            FieldTag.MIDDLE_NAME: "James",
            FieldTag.LAST_NAME: "Young",
        }

        assert build_name(fields) == "Matthew James Young"

    def test_first_only(self):
        assert build_name({FieldTag.FIRST_NAME: "Cher"}) == "Cher"

    def test_last_only(self):
        assert build_name({FieldTag.LAST_NAME: "Prince"}) == "Prince"

    def test_nothing(self):
        assert build_name({}) == ""


class TestParseFlag:
    """Tests for yes/no cell parsing."""

    @pytest.mark.parametrize("value", ["yes", "TRUE", "1", "Y", " y "])
    def test_true_values(self, value: str):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", ["no", "false", "0", "", None, "maybe"])
    def test_everything_else_false(self, value: str | None):
        assert parse_flag(value) is False


class TestBuildRecord:
    """Tests for build_record."""

    def test_roster_entry_from_split_name(self):
        """Roster rows keep name parts and typed fields."""
        headers = ["First Name", "Last Name", "Email", "Grade", "Church Name"]
        mapping = build_field_mapping(headers)
        row = dict(zip(headers, ["Ada", "Lovelace", "ADA@X.COM", "10", "St Mary"]))

        record = build_record(row, mapping, RecordKind.ROSTER)

        assert isinstance(record, RosterEntry)
        assert record.name == "Ada Lovelace"
        assert record.email == "ada@x.com"
        assert record.cohort == "10"
        assert record.first_name == "Ada"
        assert record.extra == {"church name": "St Mary"}

    def test_participant_attendance_fields(self):
        """Join/leave/duration land on the participant, not in extra."""
        headers = ["Name (Original Name)", "User Email", "Join Time", "Duration"]
        mapping = build_field_mapping(headers)
        row = dict(zip(headers, ["Bob Jones (he/him)", "bob@x.com", "9:00", "45"]))

        record = build_record(row, mapping, RecordKind.PARTICIPANT)

        assert isinstance(record, Participant)
        assert record.name == "Bob Jones"
        assert record.join_time == "9:00"
        assert record.duration == "45"
        assert record.leave_time is None
        assert record.extra == {}

    def test_flag_column_parsed(self):
        headers = ["Name", "Email", "Signed up for class"]
        mapping = build_field_mapping(headers)
        row = dict(zip(headers, ["Amy", "amy@x.com", "Yes"]))

        record = build_record(row, mapping, RecordKind.ROSTER)

        assert record is not None
        assert record.flag is True

    def test_flag_absent_without_column(self):
        mapping = build_field_mapping(["Name", "Email"])

        record = build_record({"Name": "Amy", "Email": "amy@x.com"}, mapping, RecordKind.ROSTER)

        assert record is not None
        assert record.flag is None

    def test_blank_row_returns_none(self):
        mapping = build_field_mapping(["Name", "Email"])

        assert build_record({"Name": " ", "Email": ""}, mapping, RecordKind.ROSTER) is None

    def test_roster_requires_email(self):
        mapping = build_field_mapping(["Name", "Email"])

        assert build_record({"Name": "Amy", "Email": ""}, mapping, RecordKind.ROSTER) is None

    def test_participant_without_email_is_kept(self):
        mapping = build_field_mapping(["Name", "Email"])

        record = build_record({"Name": "Amy", "Email": ""}, mapping, RecordKind.PARTICIPANT)

        assert record is not None
        assert record.email is None
        assert record.dedup_key == "name:Amy"


class TestBuildRecords:
    """Tests for build_records."""

    def test_blank_row_dropped_with_tally(self):
        """A row with neither name nor email only bumps the skipped count."""
        headers = ["Name", "Email"]
        rows = _rows(headers, ["Bob Jones", "bob@x.com"], ["", ""])

        result = build_records(rows, build_field_mapping(headers), RecordKind.PARTICIPANT)

        assert [r.name for r in result.records] == ["Bob Jones"]
        assert result.skipped_rows == 1
        assert result.errors == []
        assert result.can_proceed

    def test_invalid_email_is_row_error(self):
        headers = ["Name", "Email"]
        rows = _rows(headers, ["Bob", "bob@x.com"], ["Amy", "amy-at-example"])

        result = build_records(rows, build_field_mapping(headers), RecordKind.ROSTER)

        assert result.errors == ["Row 2: Invalid email format: amy-at-example"]
        assert not result.can_proceed
        assert len(result.records) == 1

    def test_duplicate_email_warned_once_and_kept(self):
        headers = ["Name", "Email"]
        rows = _rows(
            headers,
            ["Alice Smith", "alice@x.com"],
            ["A. Smith", "ALICE@x.com"],
            ["Bob", "bob@x.com"],
        )

        result = build_records(rows, build_field_mapping(headers), RecordKind.ROSTER)

        alice_warnings = [w for w in result.warnings if "alice@x.com" in w]
        assert alice_warnings == ["Duplicate email found: alice@x.com (2 times)"]
        assert len(result.records) == 3

    def test_duplicate_name_warned(self):
        headers = ["Name", "Email"]
        rows = _rows(headers, ["Bob Jones", "b1@x.com"], ["bob  jones", "b2@x.com"])

        result = build_records(rows, build_field_mapping(headers), RecordKind.ROSTER)

        assert "Duplicate name found: bob jones (2 times)" in result.warnings

    def test_participant_missing_email_tally(self):
        headers = ["Name", "Email"]
        rows = _rows(headers, ["Bob", ""], ["", "amy@x.com"])

        result = build_records(rows, build_field_mapping(headers), RecordKind.PARTICIPANT)

        assert "1 participants have no email address" in result.warnings
        assert "1 participants have no name" in result.warnings

    def test_no_records_warns(self):
        result = build_records([], build_field_mapping(["Name"]), RecordKind.ROSTER)

        assert result.records == []
        assert "No valid records found in CSV file" in result.warnings
