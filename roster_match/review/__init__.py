"""Review: one-to-one assignment with human overrides, and summary stats.

This module provides:
- AssignmentSession: seed / select / available_known_records / finalize
- BijectiveMap: forward and reverse dicts kept in sync
- summarize: counts by confidence tier and match rate
"""

from roster_match.review.bijection import BijectiveMap
from roster_match.review.schemas import (
    AssignedPair,
    AttendanceRow,
    FinalizedAssignment,
    MatchFilter,
    MatchSummary,
)
from roster_match.review.session import AssignmentSession
from roster_match.review.summary import summarize

__all__ = [
    "AssignedPair",
    "AssignmentSession",
    "AttendanceRow",
    "BijectiveMap",
    "FinalizedAssignment",
    "MatchFilter",
    "MatchSummary",
    "summarize",
]
