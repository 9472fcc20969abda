"""Identity matching schemas.

Defines the known (enrolled) people, the external records parsed from
uploaded CSV files, and the scored match suggestions between them.
"""

from enum import Enum
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SerializeAsAny,
    computed_field,
)


class KnownRecord(BaseModel):
    """An enrolled person supplied by the persistence layer.

    Read-only to matching: records are compared against, never modified.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable opaque identifier")
    name: str = Field(description="Full name")
    email: str = Field(description="Email on file")
    is_active: bool = Field(
        default=True, description="False once the person has been deactivated"
    )


class ExternalRecord(BaseModel):
    """A person-row parsed from an uploaded CSV file.

    Email is the preferred identity. Without one, the name stands in for
    it; a record with neither gets a random key so it never collides.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(default="", description="Resolved display name")
    email: str | None = Field(default=None, description="Lower-cased email")
    phone: str | None = Field(default=None)
    external_id: str | None = Field(default=None, description="ID in source system")
    cohort: str | None = Field(default=None, description="Grade, class or year")
    flag: bool | None = Field(
        default=None, description="Yes/no column such as 'signed up for class'"
    )
    extra: dict[str, str] = Field(
        default_factory=dict,
        description="Unrecognized columns, keyed by normalized header",
    )

    _fallback_key: str = PrivateAttr(default_factory=lambda: f"row:{uuid4().hex}")

    @property
    def dedup_key(self) -> str:
        """Identity used to collapse rows that describe the same person."""
        if self.email:
            return self.email.lower()
        if self.name:
            return f"name:{self.name}"
        return self._fallback_key


class Participant(ExternalRecord):
    """Attendee row from a video-conferencing attendance export."""

    join_time: str | None = Field(default=None)
    leave_time: str | None = Field(default=None)
    duration: str | None = Field(default=None, description="Minutes in session")


class RosterEntry(ExternalRecord):
    """Student row from a class roster import."""

    first_name: str | None = Field(default=None)
    middle_name: str | None = Field(default=None)
    last_name: str | None = Field(default=None)


class ConfidenceTier(str, Enum):
    """Bucketed quality label for a match suggestion."""

    EXACT = "exact"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class NameSimilarityResult(BaseModel):
    """Score between two free-text names with the signals that produced it."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Similarity (0-100)")
    reasons: list[str] = Field(
        default_factory=list, description="Triggered signals, in evaluation order"
    )


class MatchCandidate(BaseModel):
    """A known record suggested for an external record by name similarity."""

    known_record: KnownRecord
    score: int = Field(ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)


class MatchSuggestion(BaseModel):
    """Everything a reviewer needs to decide one external record.

    Either ``exact_match`` is set (email equality) and there are no fuzzy
    candidates, or candidates are sorted by descending score.
    """

    record: SerializeAsAny[ExternalRecord]
    exact_match: KnownRecord | None = Field(default=None)
    fuzzy_candidates: list[MatchCandidate] = Field(default_factory=list)
    confidence_tier: ConfidenceTier = Field(default=ConfidenceTier.NONE)
    domain_suggestions: list[KnownRecord] = Field(
        default_factory=list,
        description="Known records sharing the email domain (informational)",
    )

    @computed_field
    @property
    def record_key(self) -> str:
        """Key of this record in the session assignment."""
        return self.record.dedup_key

    @property
    def top_candidate(self) -> MatchCandidate | None:
        return self.fuzzy_candidates[0] if self.fuzzy_candidates else None

    @property
    def top_score(self) -> int:
        """100 for exact matches, else the best candidate score (0 if none)."""
        if self.exact_match is not None:
            return 100
        top = self.top_candidate
        return top.score if top else 0
