"""Exception hierarchy for roster matching.

Ingestion and matching report problems as data on their result objects;
these exceptions cover the few cases that abort an operation outright.
"""


class RosterMatchError(Exception):
    """Base class for roster matching errors."""


class CSVParseError(RosterMatchError):
    """Raised when a file's delimited structure cannot be read at all."""


class PersistenceTimeoutError(RosterMatchError):
    """Raised when the attendance store does not finish within the timeout."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Attendance commit timed out after {timeout_seconds}s")
