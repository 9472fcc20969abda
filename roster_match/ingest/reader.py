"""Tabular ingest: read comma-separated text into rows of named fields."""

import csv
import io
from pathlib import Path

from roster_match.errors import CSVParseError
from roster_match.ingest.schemas import RawRow

UPLOAD_EXTENSION = ".csv"
_MEGABYTE = 1024 * 1024


def read_rows(text: str) -> tuple[list[str], list[RawRow]]:
    """Parse CSV text whose first line holds the headers.

    Empty lines are skipped. Missing trailing cells read as "" and cells
    beyond the header count are dropped.

    Args:
        text: Decoded file content

    Returns:
        Tuple of (headers, rows)

    Raises:
        CSVParseError: If the delimited structure cannot be read
    """
    text = text.lstrip("\ufeff")
    if not text.strip():
        return [], []

    reader = csv.DictReader(io.StringIO(text, newline=""), restval="", strict=True)
    try:
        headers = [h for h in (reader.fieldnames or []) if h is not None]
        rows: list[RawRow] = []
        for raw in reader:
            rows.append(
                {
                    key: (value or "")
                    for key, value in raw.items()
                    if isinstance(key, str)
                }
            )
    except csv.Error as e:
        raise CSVParseError(f"CSV parsing error: {e}") from e

    return headers, rows


def read_rows_from_path(path: Path | str) -> tuple[list[str], list[RawRow]]:
    """Read a CSV file from disk. A missing file reads as empty.

    Raises:
        CSVParseError: If the file is not UTF-8 text or is malformed
    """
    path = Path(path)
    if not path.exists():
        return [], []
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise CSVParseError(f"CSV parsing error: file is not UTF-8 text ({e})") from e
    return read_rows(text)


def validate_upload(filename: str, size_bytes: int, max_bytes: int) -> str | None:
    """Check an uploaded file before reading it.

    Args:
        filename: Name the file was uploaded as
        size_bytes: Size of the upload
        max_bytes: Largest accepted upload

    Returns:
        Error message, or None if the upload is acceptable
    """
    if not filename.lower().endswith(UPLOAD_EXTENSION):
        return "File must be a CSV file"
    if size_bytes == 0:
        return "File is empty"
    return check_upload_size(size_bytes, max_bytes)


def check_upload_size(size_bytes: int, max_bytes: int) -> str | None:
    """Return an error message if an upload exceeds ``max_bytes``."""
    if size_bytes <= max_bytes:
        return None
    if max_bytes % _MEGABYTE == 0:
        return f"File size must be less than {max_bytes // _MEGABYTE}MB"
    return f"File size must be less than {max_bytes} bytes"
