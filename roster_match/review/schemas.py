"""Review schemas.

Defines the finalized assignment handed to the persistence layer, the
attendance rows it produces, and match-quality summary stats.
"""

from enum import Enum

from pydantic import BaseModel, Field, SerializeAsAny

from roster_match.identity.schemas import ExternalRecord, KnownRecord


class MatchFilter(str, Enum):
    """Reviewer-facing views over suggestions."""

    MATCHED = "matched"  # exact + high
    UNMATCHED = "unmatched"  # medium + low + none
    ALL = "all"


class AttendanceRow(BaseModel):
    """One row for the attendance store."""

    known_record_id: str = Field(description="Enrolled person marked present")
    status: str = Field(default="present")
    notes: str | None = Field(default=None)
    verified_by: str | None = Field(default=None, description="Reviewer id")


class AssignedPair(BaseModel):
    known_record_id: str
    record: SerializeAsAny[ExternalRecord]


class FinalizedAssignment(BaseModel):
    """Completed review: who was matched, who was not, who was absent."""

    pairs: list[AssignedPair] = Field(default_factory=list)
    unresolved: list[SerializeAsAny[ExternalRecord]] = Field(
        default_factory=list, description="External records left unassigned"
    )
    absent: list[KnownRecord] = Field(
        default_factory=list, description="Known records nobody was assigned to"
    )

    def to_attendance_rows(
        self,
        notes: str | None = None,
        verified_by: str | None = None,
    ) -> list[AttendanceRow]:
        """Build "present" rows for every assigned known record."""
        return [
            AttendanceRow(
                known_record_id=pair.known_record_id,
                notes=notes,
                verified_by=verified_by,
            )
            for pair in self.pairs
        ]


class MatchSummary(BaseModel):
    """Counts by confidence tier plus overall match rate."""

    total: int = Field(default=0, ge=0)
    exact: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    low: int = Field(default=0, ge=0)
    none: int = Field(default=0, ge=0)
    match_rate: int = Field(
        default=0, ge=0, le=100, description="% exact, high or medium"
    )
