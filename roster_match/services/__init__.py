"""Application services composing ingest, matching and review."""

from roster_match.services.import_service import ImportOutcome, ImportService

__all__ = ["ImportOutcome", "ImportService"]
