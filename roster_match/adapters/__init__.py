"""Adapters for the attendance persistence collaborator.

This module provides:
- AttendanceStore: Protocol for stores that persist attendance rows
- AttendanceWriter: Timeout-bounded commit of a finalized assignment
- WriteResult: Result model for write operations
"""

from roster_match.adapters.attendance_writer import AttendanceWriter
from roster_match.adapters.base import AttendanceStore, WriteResult

__all__ = [
    "AttendanceStore",
    "AttendanceWriter",
    "WriteResult",
]
