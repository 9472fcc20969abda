"""Confidence tier calculation for match suggestions.

Buckets a numeric name score into the tier shown to reviewers:
- Exact email match is always EXACT, regardless of names
- >= high threshold (85) is HIGH and eligible for auto-assignment
- >= medium threshold (70) is MEDIUM
- anything kept as a candidate (>= 50) is LOW
"""

from roster_match.identity.schemas import ConfidenceTier

HIGH_THRESHOLD = 85
MEDIUM_THRESHOLD = 70
CANDIDATE_THRESHOLD = 50


def tier_for_score(
    score: int | None,
    high_threshold: int = HIGH_THRESHOLD,
    medium_threshold: int = MEDIUM_THRESHOLD,
) -> ConfidenceTier:
    """Map the top candidate score to a confidence tier.

    Args:
        score: Best surviving candidate score, or None when there are
               no candidates
        high_threshold: Lowest score labelled HIGH
        medium_threshold: Lowest score labelled MEDIUM

    Returns:
        ConfidenceTier for the score (NONE when score is None)
    """
    if score is None:
        return ConfidenceTier.NONE
    if score >= high_threshold:
        return ConfidenceTier.HIGH
    if score >= medium_threshold:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.LOW
