"""ImportService runs one CSV file through ingest, matching and seeding.

Pipeline (in order):
1. Read rows (fatal structure problems become a single error)
2. Normalize headers and build typed records
3. Match records against known records (only if no row errors)
4. Seed a fresh AssignmentSession and summarize
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from roster_match.config import Settings, get_settings
from roster_match.errors import CSVParseError
from roster_match.identity.matcher import Matcher
from roster_match.identity.schemas import KnownRecord, MatchSuggestion
from roster_match.ingest.builder import build_records
from roster_match.ingest.headers import build_field_mapping
from roster_match.ingest.reader import (
    check_upload_size,
    read_rows,
    read_rows_from_path,
    validate_upload,
)
from roster_match.ingest.schemas import ImportResult, RawRow, RecordKind
from roster_match.review.schemas import MatchSummary
from roster_match.review.session import AssignmentSession
from roster_match.review.summary import summarize

logger = structlog.get_logger()


@dataclass
class ImportOutcome:
    """Everything a review screen needs for one import."""

    import_result: ImportResult
    suggestions: list[MatchSuggestion]
    session: AssignmentSession | None
    summary: MatchSummary


class ImportService:
    """Stateless entry point; every call builds its own mapping and session."""

    def __init__(
        self, matcher: Matcher | None = None, settings: Settings | None = None
    ):
        self._settings = settings or get_settings()
        self._matcher = matcher or Matcher.from_settings(self._settings)

    def parse_text(self, text: str, kind: RecordKind) -> ImportResult:
        """Parse CSV text into typed records with errors and warnings.

        Text larger than the upload limit is rejected before parsing.
        """
        problem = check_upload_size(
            len(text.encode("utf-8")), self._settings.max_upload_bytes
        )
        if problem:
            logger.warning("Rejected oversized CSV", kind=kind.value, error=problem)
            return ImportResult(kind=kind, errors=[problem])
        try:
            headers, rows = read_rows(text)
        except CSVParseError as e:
            logger.warning("Rejected malformed CSV", kind=kind.value, error=str(e))
            return ImportResult(kind=kind, errors=[str(e)])
        return self._build(headers, rows, kind)

    def parse_file(self, path: Path | str, kind: RecordKind) -> ImportResult:
        """Parse a CSV file from disk; a missing file imports nothing."""
        try:
            headers, rows = read_rows_from_path(path)
        except CSVParseError as e:
            logger.warning("Rejected malformed CSV", path=str(path), error=str(e))
            return ImportResult(kind=kind, errors=[str(e)])
        return self._build(headers, rows, kind)

    def parse_upload(
        self, filename: str, data: bytes, kind: RecordKind
    ) -> ImportResult:
        """Validate and parse an uploaded file's bytes."""
        problem = validate_upload(filename, len(data), self._settings.max_upload_bytes)
        if problem:
            return ImportResult(kind=kind, errors=[problem])
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            return ImportResult(
                kind=kind, errors=[f"CSV parsing error: file is not UTF-8 text ({e})"]
            )
        return self.parse_text(text, kind)

    def prepare_review(
        self,
        import_result: ImportResult,
        known_records: Sequence[KnownRecord],
    ) -> ImportOutcome:
        """Match parsed records and seed a review session.

        A batch with any errors is not matched: it goes back to the user
        for correction with an empty summary and no session.
        """
        if not import_result.can_proceed:
            return ImportOutcome(
                import_result=import_result,
                suggestions=[],
                session=None,
                summary=summarize([]),
            )

        suggestions = self._matcher.match_all(import_result.records, known_records)
        session = AssignmentSession(suggestions, known_records)
        session.seed()
        return ImportOutcome(
            import_result=import_result,
            suggestions=session.suggestions,
            session=session,
            summary=summarize(session.suggestions),
        )

    def run(
        self,
        text: str,
        kind: RecordKind,
        known_records: Sequence[KnownRecord],
    ) -> ImportOutcome:
        return self.prepare_review(self.parse_text(text, kind), known_records)

    def _build(
        self, headers: list[str], rows: list[RawRow], kind: RecordKind
    ) -> ImportResult:
        mapping = build_field_mapping(headers)
        return build_records(rows, mapping, kind)
