"""Import preview API endpoints.

Parses an uploaded attendance export or roster, matches it against the
known records supplied by the caller, and returns the seeded assignment
for human review. Nothing is persisted here.
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from roster_match.identity.schemas import ConfidenceTier, KnownRecord, MatchSuggestion
from roster_match.ingest.schemas import RecordKind
from roster_match.review.schemas import MatchSummary
from roster_match.services.import_service import ImportService

router = APIRouter(prefix="/imports", tags=["imports"])


class PreviewRequest(BaseModel):
    """Request to preview matches for one CSV file."""

    csv_text: str = Field(description="Decoded CSV file content")
    kind: RecordKind = Field(default=RecordKind.PARTICIPANT)
    known_records: list[KnownRecord] = Field(
        default_factory=list, description="Enrolled people to match against"
    )


class PreviewResponse(BaseModel):
    """Suggestions, seeded assignment and stats for review."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    skipped_rows: int = Field(default=0)
    suggestions: list[MatchSuggestion] = Field(default_factory=list)
    assignments: dict[str, str] = Field(
        default_factory=dict, description="record_key -> known_record_id"
    )
    summary: MatchSummary
    review_summary: str | None = Field(
        default=None,
        description="Human-readable summary if records need review",
    )


def get_import_service(request: Request) -> ImportService:
    """Dependency to get ImportService from app state."""
    return request.app.state.import_service


def _generate_review_summary(
    suggestions: list[MatchSuggestion], assignments: dict[str, str]
) -> str | None:
    """Generate human-readable summary of records still needing review.

    Args:
        suggestions: Suggestions for the import
        assignments: Seeded record_key -> known_record_id mapping

    Returns:
        Summary string or None if every record was assigned
    """
    pending = [s for s in suggestions if s.record_key not in assignments]
    if not pending:
        return None

    lines = [f"{len(pending)} record(s) need review:"]
    for item in pending[:5]:  # Show first 5
        label = item.record.name or item.record.email or "(blank)"
        top = item.top_candidate
        if top is not None:
            lines.append(
                f"  - '{label}' -> '{top.known_record.name}' "
                f"({top.score}%, {item.confidence_tier.value})? (needs confirmation)"
            )
        elif item.confidence_tier is ConfidenceTier.EXACT:
            lines.append(f"  - '{label}' -> email already assigned to another record")
        else:
            lines.append(f"  - '{label}' -> no match found")

    if len(pending) > 5:
        lines.append(f"  ... and {len(pending) - 5} more")

    return "\n".join(lines)


@router.post("/preview", response_model=PreviewResponse)
async def preview_import(
    request: PreviewRequest,
    service: ImportService = Depends(get_import_service),
) -> PreviewResponse:
    """Parse a CSV file and suggest matches for review.

    Records with an exact email match or a high-confidence name match
    are pre-assigned; the rest are listed in review_summary. A file with
    row errors is returned with its errors and no suggestions.

    Args:
        request: CSV content, file kind and known records
        service: Import pipeline

    Returns:
        PreviewResponse with suggestions, seeded assignment and stats
    """
    outcome = service.run(request.csv_text, request.kind, request.known_records)
    result = outcome.import_result
    assignments = outcome.session.assignments if outcome.session else {}

    return PreviewResponse(
        errors=result.errors,
        warnings=result.warnings,
        skipped_rows=result.skipped_rows,
        suggestions=outcome.suggestions,
        assignments=assignments,
        summary=outcome.summary,
        review_summary=_generate_review_summary(outcome.suggestions, assignments),
    )
