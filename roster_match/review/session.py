"""AssignmentSession holds one review session's external -> known mapping.

The mapping is one-to-one: a known record is assigned to at most one
external record at a time. Selecting a known record already held by
another external record moves it rather than failing.
"""

from collections.abc import Sequence

import structlog

from roster_match.identity.schemas import (
    ConfidenceTier,
    ExternalRecord,
    KnownRecord,
    MatchCandidate,
    MatchSuggestion,
)
from roster_match.review.bijection import BijectiveMap
from roster_match.review.schemas import AssignedPair, FinalizedAssignment, MatchFilter

logger = structlog.get_logger()

_MATCHED_TIERS = frozenset({ConfidenceTier.EXACT, ConfidenceTier.HIGH})


class AssignmentSession:
    """Mutable, reviewer-adjustable assignment for one import.

    Owned by the caller: create one per import run and discard it to
    cancel. Nothing is persisted until the finalized result is handed to
    the attendance store.
    """

    def __init__(
        self,
        suggestions: Sequence[MatchSuggestion],
        known_records: Sequence[KnownRecord],
    ):
        """Initialize an empty session.

        Suggestions whose records share a dedup key are collapsed to the
        first one, so a person is never represented twice.

        Args:
            suggestions: Matcher output for the import
            known_records: Enrolled people that may be assigned
        """
        self._suggestions: dict[str, MatchSuggestion] = {}
        for suggestion in suggestions:
            self._suggestions.setdefault(suggestion.record_key, suggestion)

        collapsed = len(suggestions) - len(self._suggestions)
        if collapsed:
            logger.info("Collapsed duplicate records", collapsed=collapsed)

        self._known: dict[str, KnownRecord] = {k.id: k for k in known_records}
        self._assignment: BijectiveMap[str, str] = BijectiveMap()

    @property
    def suggestions(self) -> list[MatchSuggestion]:
        return list(self._suggestions.values())

    @property
    def assignments(self) -> dict[str, str]:
        """Current record_key -> known_record_id mapping (a copy)."""
        return self._assignment.as_dict()

    def seed(self) -> int:
        """Pre-assign exact matches, then high-confidence top candidates.

        Exact matches are placed first so a fuzzy guess can never take a
        person claimed by email. A fuzzy top candidate already taken is
        left for the reviewer. Re-running resets to the same result.

        Returns:
            Number of records assigned
        """
        self._assignment.clear()

        for key, suggestion in self._suggestions.items():
            exact = suggestion.exact_match
            if exact is not None and exact.id in self._known:
                if not self._assignment.holds(exact.id):
                    self._assignment.assign(key, exact.id)

        for key, suggestion in self._suggestions.items():
            if key in self._assignment:
                continue
            top = suggestion.top_candidate
            if (
                suggestion.exact_match is None
                and suggestion.confidence_tier is ConfidenceTier.HIGH
                and top is not None
                and top.known_record.id in self._known
                and not self._assignment.holds(top.known_record.id)
            ):
                self._assignment.assign(key, top.known_record.id)

        logger.info(
            "Seeded assignment",
            assigned=len(self._assignment),
            records=len(self._suggestions),
        )
        return len(self._assignment)

    def select(self, record_key: str, known_record_id: str | None) -> None:
        """Assign a known record to an external record.

        If another record holds ``known_record_id`` it loses it. An empty
        or None id clears the record's assignment. Unknown keys or ids
        are ignored.
        """
        if record_key not in self._suggestions:
            logger.warning(
                "Ignoring selection for unknown record", record_key=record_key
            )
            return

        if not known_record_id:
            self._assignment.unassign(record_key)
            return

        if known_record_id not in self._known:
            logger.warning(
                "Ignoring selection of unknown known record",
                record_key=record_key,
                known_record_id=known_record_id,
            )
            return

        displaced = self._assignment.assign(record_key, known_record_id)
        if displaced is not None:
            logger.info(
                "Reassigned known record",
                known_record_id=known_record_id,
                from_record=displaced,
                to_record=record_key,
            )

    def clear(self, record_key: str) -> None:
        self.select(record_key, None)

    def assigned_record(self, record_key: str) -> KnownRecord | None:
        known_id = self._assignment.get(record_key)
        return self._known.get(known_id) if known_id else None

    def available_known_records(
        self, for_record: str | None = None
    ) -> list[KnownRecord]:
        """Known records not assigned to anyone.

        Args:
            for_record: If given, that record's own assignment stays in the
                        list so its picker can show the current choice

        Returns:
            Known records in their original order
        """
        own = self._assignment.get(for_record) if for_record else None
        return [
            k
            for k in self._known.values()
            if k.id == own or not self._assignment.holds(k.id)
        ]

    def available_candidates(self, record_key: str) -> list[MatchCandidate]:
        """Fuzzy candidates for a record that nobody else holds."""
        suggestion = self._suggestions.get(record_key)
        if suggestion is None:
            return []
        return [
            c
            for c in suggestion.fuzzy_candidates
            if self._assignment.key_for(c.known_record.id) in (None, record_key)
        ]

    def approve_high_confidence(self) -> int:
        """Assign top candidates of unassigned high-confidence suggestions.

        Only candidates that are still available are taken.

        Returns:
            Number of records newly assigned
        """
        approved = 0
        for key, suggestion in self._suggestions.items():
            top = suggestion.top_candidate
            if (
                key in self._assignment
                or suggestion.confidence_tier is not ConfidenceTier.HIGH
                or top is None
                or top.known_record.id not in self._known
                or self._assignment.holds(top.known_record.id)
            ):
                continue
            self._assignment.assign(key, top.known_record.id)
            approved += 1
        return approved

    def filter_suggestions(self, view: MatchFilter) -> list[MatchSuggestion]:
        if view is MatchFilter.MATCHED:
            return [
                s
                for s in self._suggestions.values()
                if s.confidence_tier in _MATCHED_TIERS
            ]
        if view is MatchFilter.UNMATCHED:
            return [
                s
                for s in self._suggestions.values()
                if s.confidence_tier not in _MATCHED_TIERS
            ]
        return self.suggestions

    def finalize(self) -> FinalizedAssignment:
        """Extract the completed mapping.

        Returns:
            FinalizedAssignment with assigned pairs in record order,
            unassigned records as unresolved, and unclaimed known records
            as absent
        """
        pairs: list[AssignedPair] = []
        unresolved: list[ExternalRecord] = []
        for key, suggestion in self._suggestions.items():
            known_id = self._assignment.get(key)
            if known_id:
                pairs.append(
                    AssignedPair(known_record_id=known_id, record=suggestion.record)
                )
            else:
                unresolved.append(suggestion.record)

        return FinalizedAssignment(
            pairs=pairs,
            unresolved=unresolved,
            absent=self.available_known_records(),
        )
