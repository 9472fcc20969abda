"""Identity matching between uploaded records and enrolled people.

This module provides:
- similarity: 0-100 name score with human-readable reasons
- Matcher: exact email match, then ranked fuzzy name candidates
- Confidence tiers derived from the best candidate score
- Schemas for known records, external records and suggestions
"""

from roster_match.identity.confidence import tier_for_score
from roster_match.identity.matcher import Matcher
from roster_match.identity.schemas import (
    ConfidenceTier,
    ExternalRecord,
    KnownRecord,
    MatchCandidate,
    MatchSuggestion,
    NameSimilarityResult,
    Participant,
    RosterEntry,
)
from roster_match.identity.similarity import ScoringWeights, similarity

__all__ = [
    "ConfidenceTier",
    "ExternalRecord",
    "KnownRecord",
    "MatchCandidate",
    "MatchSuggestion",
    "Matcher",
    "NameSimilarityResult",
    "Participant",
    "RosterEntry",
    "ScoringWeights",
    "similarity",
    "tier_for_score",
]
