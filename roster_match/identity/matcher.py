"""Matcher suggests known records for each incoming external record.

Matching pipeline (in order):
1. Exact email match (case-insensitive, authoritative)
2. Fuzzy name scoring against every eligible known record
"""

from collections.abc import Sequence

import structlog

from roster_match.config import Settings
from roster_match.identity.confidence import (
    CANDIDATE_THRESHOLD,
    HIGH_THRESHOLD,
    MEDIUM_THRESHOLD,
    tier_for_score,
)
from roster_match.identity.schemas import (
    ConfidenceTier,
    ExternalRecord,
    KnownRecord,
    MatchCandidate,
    MatchSuggestion,
)
from roster_match.identity.similarity import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    normalize_name,
    similarity,
)

logger = structlog.get_logger()


class Matcher:
    """Builds a MatchSuggestion per external record.

    An exact email match short-circuits name scoring entirely: email is
    authoritative and is never second-guessed by name heuristics.
    """

    def __init__(
        self,
        candidate_threshold: int = CANDIDATE_THRESHOLD,
        medium_threshold: int = MEDIUM_THRESHOLD,
        high_threshold: int = HIGH_THRESHOLD,
        max_candidates: int = 5,
        match_inactive: bool = True,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        domain_suggestion_limit: int = 3,
    ):
        """Initialize matcher with thresholds and eligibility policy.

        Args:
            candidate_threshold: Minimum score to keep a fuzzy candidate
            medium_threshold: Lowest top score labelled MEDIUM
            high_threshold: Lowest top score labelled HIGH
            max_candidates: Number of candidates kept per record
            match_inactive: Whether deactivated known records may match
            weights: Name scoring constants
            domain_suggestion_limit: Same-domain suggestions kept per record
        """
        self._candidate_threshold = candidate_threshold
        self._medium_threshold = medium_threshold
        self._high_threshold = high_threshold
        self._max_candidates = max_candidates
        self._match_inactive = match_inactive
        self._weights = weights
        self._domain_limit = domain_suggestion_limit

    @classmethod
    def from_settings(
        cls, settings: Settings, weights: ScoringWeights = DEFAULT_WEIGHTS
    ) -> "Matcher":
        return cls(
            candidate_threshold=settings.candidate_threshold,
            medium_threshold=settings.medium_threshold,
            high_threshold=settings.high_threshold,
            max_candidates=settings.max_candidates,
            match_inactive=settings.match_inactive,
            weights=weights,
        )

    def match(
        self,
        record: ExternalRecord,
        known_records: Sequence[KnownRecord],
    ) -> MatchSuggestion:
        """Suggest known records for one external record.

        Args:
            record: Record parsed from the uploaded file
            known_records: Enrolled people to match against

        Returns:
            MatchSuggestion with either an exact match or ranked fuzzy
            candidates; tier NONE when nothing scored high enough
        """
        eligible = [k for k in known_records if self._is_eligible(k)]

        # Stage 1: Exact email
        exact = self._exact_email_match(record, eligible)
        if exact is not None:
            return MatchSuggestion(
                record=record,
                exact_match=exact,
                confidence_tier=ConfidenceTier.EXACT,
            )

        # Stage 2: Fuzzy name
        candidates = self._fuzzy_candidates(record, eligible)
        top_score = candidates[0].score if candidates else None

        return MatchSuggestion(
            record=record,
            fuzzy_candidates=candidates,
            confidence_tier=tier_for_score(
                top_score, self._high_threshold, self._medium_threshold
            ),
            domain_suggestions=self._domain_suggestions(record, eligible),
        )

    def match_all(
        self,
        records: Sequence[ExternalRecord],
        known_records: Sequence[KnownRecord],
    ) -> list[MatchSuggestion]:
        """Match multiple records.

        Args:
            records: Records parsed from the uploaded file
            known_records: Enrolled people to match against

        Returns:
            List of suggestions in same order as records
        """
        suggestions = [self.match(record, known_records) for record in records]
        logger.info(
            "Matched records",
            total=len(suggestions),
            known=len(known_records),
            exact=sum(
                1 for s in suggestions if s.confidence_tier is ConfidenceTier.EXACT
            ),
        )
        return suggestions

    def _is_eligible(self, known: KnownRecord) -> bool:
        return self._match_inactive or known.is_active

    def _exact_email_match(
        self,
        record: ExternalRecord,
        known_records: list[KnownRecord],
    ) -> KnownRecord | None:
        if not record.email:
            return None
        email = record.email.strip().lower()
        for known in known_records:
            if known.email.strip().lower() == email:
                return known
        return None

    def _fuzzy_candidates(
        self,
        record: ExternalRecord,
        known_records: list[KnownRecord],
    ) -> list[MatchCandidate]:
        if not normalize_name(record.name):
            return []

        candidates: list[MatchCandidate] = []
        for known in known_records:
            # A blank known name would "exactly" match any blank-normalizing input
            if not normalize_name(known.name):
                continue
            result = similarity(record.name, known.name, self._weights)
            if result.score >= self._candidate_threshold:
                candidates.append(
                    MatchCandidate(
                        known_record=known,
                        score=result.score,
                        reasons=result.reasons,
                    )
                )

        # Stable sort: ties keep known_records order
        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates[: self._max_candidates]

    def _domain_suggestions(
        self,
        record: ExternalRecord,
        known_records: list[KnownRecord],
    ) -> list[KnownRecord]:
        if not record.email or "@" not in record.email:
            return []
        domain = record.email.rsplit("@", 1)[1].lower()
        matches = [
            k
            for k in known_records
            if "@" in k.email and k.email.rsplit("@", 1)[1].strip().lower() == domain
        ]
        return matches[: self._domain_limit]
