"""Base types for the attendance persistence collaborator.

This module defines the AttendanceStore protocol and WriteResult model
used to hand a finalized assignment to whatever stores attendance.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from roster_match.review.schemas import AttendanceRow


class WriteResult(BaseModel):
    """Result of a write to the attendance store.

    Per-row outcomes such as "already recorded" skips are the store's
    bookkeeping; they surface here only as counts.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    success: bool = Field(description="Whether the write succeeded")
    item_count: int = Field(default=0, description="Number of rows written")
    skipped_count: int = Field(
        default=0, description="Rows the store skipped (e.g. already recorded)"
    )
    error_message: str | None = Field(
        default=None, description="Error message if failed"
    )
    duration_ms: int | None = Field(
        default=None, description="Operation duration in milliseconds"
    )


@runtime_checkable
class AttendanceStore(Protocol):
    """Protocol for stores that persist attendance rows.

    Stores implement this protocol for structural subtyping -
    they don't need to inherit, just implement the method.
    """

    async def save_attendance(self, rows: list[AttendanceRow]) -> WriteResult:
        """Persist attendance rows.

        Args:
            rows: Rows marking known records present

        Returns:
            WriteResult with operation outcome
        """
        ...
