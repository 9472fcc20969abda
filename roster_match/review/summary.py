"""Summary statistics over match suggestions."""

import math
from collections import Counter
from collections.abc import Iterable

from roster_match.identity.schemas import ConfidenceTier, MatchSuggestion
from roster_match.review.schemas import MatchSummary


def summarize(suggestions: Iterable[MatchSuggestion]) -> MatchSummary:
    """Count suggestions per confidence tier.

    ``match_rate`` is the rounded percentage of exact, high and medium
    suggestions, or 0 for an empty list.
    """
    tiers = Counter(s.confidence_tier for s in suggestions)
    total = sum(tiers.values())
    matched = (
        tiers[ConfidenceTier.EXACT]
        + tiers[ConfidenceTier.HIGH]
        + tiers[ConfidenceTier.MEDIUM]
    )
    match_rate = math.floor(100 * matched / total + 0.5) if total else 0

    return MatchSummary(
        total=total,
        exact=tiers[ConfidenceTier.EXACT],
        high=tiers[ConfidenceTier.HIGH],
        medium=tiers[ConfidenceTier.MEDIUM],
        low=tiers[ConfidenceTier.LOW],
        none=tiers[ConfidenceTier.NONE],
        match_rate=match_rate,
    )
