"""Hands finalized assignments to the attendance store under a timeout."""

import asyncio
import time

import structlog

from roster_match.adapters.base import AttendanceStore, WriteResult
from roster_match.config import Settings
from roster_match.errors import PersistenceTimeoutError
from roster_match.review.schemas import FinalizedAssignment

logger = structlog.get_logger()


class AttendanceWriter:
    """Commits a finalized assignment through an AttendanceStore.

    The write is not retried: a store call is not safe to repeat blindly,
    so retry and partial-failure handling stay with the store.
    """

    def __init__(self, store: AttendanceStore, timeout_seconds: float = 30.0):
        """Initialize writer.

        Args:
            store: Attendance persistence collaborator
            timeout_seconds: Longest a commit may take before giving up
        """
        self._store = store
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(
        cls, store: AttendanceStore, settings: Settings
    ) -> "AttendanceWriter":
        return cls(store, timeout_seconds=settings.persist_timeout_seconds)

    async def commit(
        self,
        finalized: FinalizedAssignment,
        notes: str | None = None,
        verified_by: str | None = None,
    ) -> WriteResult:
        """Write "present" rows for every assigned known record.

        Args:
            finalized: Result of AssignmentSession.finalize()
            notes: Optional note stored on every row
            verified_by: Optional reviewer id stored on every row

        Returns:
            WriteResult from the store (item_count 0 without a store call
            when nothing was assigned)

        Raises:
            PersistenceTimeoutError: If the store exceeds the timeout
        """
        rows = finalized.to_attendance_rows(notes=notes, verified_by=verified_by)
        if not rows:
            return WriteResult(success=True, item_count=0)

        started = time.monotonic()
        try:
            result = await asyncio.wait_for(
                self._store.save_attendance(rows), timeout=self._timeout
            )
        except TimeoutError:
            logger.warning(
                "Attendance commit timed out",
                rows=len(rows),
                timeout_seconds=self._timeout,
            )
            raise PersistenceTimeoutError(self._timeout) from None

        if result.duration_ms is None:
            result.duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "Committed attendance",
            rows=len(rows),
            written=result.item_count,
            skipped=result.skipped_count,
            success=result.success,
        )
        return result
