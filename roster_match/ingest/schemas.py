"""Ingest schemas.

Defines the semantic field tags, the per-file header mapping, and the
result of importing one CSV file.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from roster_match.identity.schemas import ExternalRecord

# One CSV line: header -> cell text ("" when blank)
RawRow = dict[str, str]


class FieldTag(str, Enum):
    """Semantic meaning of a recognized column."""

    FULL_NAME = "full_name"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    MIDDLE_NAME = "middle_name"
    EMAIL = "email"
    PHONE = "phone"
    EXTERNAL_ID = "external_id"
    GRADE_OR_COHORT = "grade_or_cohort"
    BOOLEAN_FLAG = "boolean_flag"


class RecordKind(str, Enum):
    """Which kind of file is being imported."""

    PARTICIPANT = "participant"
    ROSTER = "roster"


class FieldMapping(BaseModel):
    """Raw header -> semantic tag (or pass-through column name) for one file.

    Recognized headers map to a FieldTag value; unrecognized headers map
    to their normalized text and are carried as opaque extra fields.
    """

    model_config = ConfigDict(frozen=True)

    columns: dict[str, str] = Field(default_factory=dict)

    def tag_for(self, header: str) -> FieldTag | None:
        value = self.columns.get(header)
        if value is None:
            return None
        try:
            return FieldTag(value)
        except ValueError:
            return None

    def headers_for(self, tag: FieldTag) -> list[str]:
        """Raw headers mapped to ``tag``, in file order."""
        return [h for h, v in self.columns.items() if v == tag.value]

    @property
    def recognized(self) -> set[FieldTag]:
        return {tag for h in self.columns if (tag := self.tag_for(h)) is not None}


class ImportResult(BaseModel):
    """Result of importing one CSV file.

    Errors block matching; warnings are advisory. Both are returned as
    data so callers can show them next to whatever did import.
    """

    kind: RecordKind
    records: list[SerializeAsAny[ExternalRecord]] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    skipped_rows: int = Field(
        default=0, description="Rows dropped for missing name or email"
    )
    field_mapping: FieldMapping | None = Field(default=None)

    @property
    def can_proceed(self) -> bool:
        """True if the batch may move on to matching."""
        return not self.errors
