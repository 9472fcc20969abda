"""CSV ingest for attendance exports and roster imports.

This module provides:
- read_rows / read_rows_from_path: tolerant CSV reading
- build_field_mapping: ranked header recognition
- build_records: row validation into typed records with errors/warnings
"""

from roster_match.ingest.builder import build_records, find_duplicates, parse_flag
from roster_match.ingest.headers import build_field_mapping, classify_header
from roster_match.ingest.reader import (
    check_upload_size,
    read_rows,
    read_rows_from_path,
    validate_upload,
)
from roster_match.ingest.schemas import (
    FieldMapping,
    FieldTag,
    ImportResult,
    RawRow,
    RecordKind,
)

__all__ = [
    "FieldMapping",
    "FieldTag",
    "ImportResult",
    "RawRow",
    "RecordKind",
    "build_field_mapping",
    "build_records",
    "check_upload_size",
    "classify_header",
    "find_duplicates",
    "parse_flag",
    "read_rows",
    "read_rows_from_path",
    "validate_upload",
]
