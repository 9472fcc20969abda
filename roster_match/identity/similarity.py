"""Name similarity scoring between two free-text person names.

Scores accumulate from independent signals (first/last token equality,
token edit-distance similarity, containment, reversed order, initials)
and are clamped to 0-100. Each triggered signal leaves a short reason so
reviewers can see why a candidate was suggested.
"""

import math
import re
from typing import NamedTuple

from pydantic import BaseModel, Field
from rapidfuzz.distance import Levenshtein

from roster_match.identity.schemas import NameSimilarityResult

GENERATIONAL_SUFFIXES = frozenset({"jr", "sr", "ii", "iii", "iv"})

_PUNCTUATION = re.compile(r"[^\w\s]")


class ScoringWeights(BaseModel):
    """Empirically chosen scoring constants.

    Defaults reproduce the established behavior; adjust per deployment
    rather than editing the scorer.
    """

    first_exact: int = Field(default=40)
    last_exact: int = Field(default=40)
    similar_min: int = Field(default=80, description="Token similarity floor")
    somewhat_similar_min: int = Field(default=60, description="Last-name floor")
    first_similar_factor: float = Field(default=0.3)
    last_similar_factor: float = Field(default=0.4)
    last_somewhat_similar_factor: float = Field(default=0.3)
    contains_other: int = Field(
        default=25, description="Incoming name contains the known name"
    )
    contained_in_other: int = Field(
        default=20, description="Known name contains the incoming name"
    )
    both_tokens_present: int = Field(default=20)
    one_token_present: int = Field(default=10)
    reversed_order_floor: int = Field(default=85)
    same_initials: int = Field(default=5)


DEFAULT_WEIGHTS = ScoringWeights()


class NameParts(NamedTuple):
    first: str
    last: str
    middle: tuple[str, ...]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize_name(name: str) -> str:
    """Lower-case, strip punctuation, collapse whitespace, drop suffixes.

    Only trailing generational suffixes (Jr, Sr, II, III, IV) are removed,
    so a leading token such as a first name is never discarded.
    """
    tokens = _PUNCTUATION.sub("", name.lower()).split()
    while tokens and tokens[-1] in GENERATIONAL_SUFFIXES:
        tokens.pop()
    return " ".join(tokens)


def split_name(normalized: str) -> NameParts:
    """Split an already-normalized name into first, last and middle tokens."""
    tokens = normalized.split()
    if not tokens:
        return NameParts("", "", ())
    if len(tokens) == 1:
        return NameParts(tokens[0], "", ())
    return NameParts(tokens[0], tokens[-1], tuple(tokens[1:-1]))


def token_similarity(a: str, b: str) -> int:
    """Edit-distance similarity of two tokens on a 0-100 scale.

    ``100 * (max_len - distance) / max_len`` using unit-cost Levenshtein
    distance. Two empty tokens score 0.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 0
    if a == b:
        return 100
    distance = Levenshtein.distance(a, b)
    return _round_half_up((max_len - distance) / max_len * 100)


def similarity(
    a: str, b: str, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> NameSimilarityResult:
    """Score how likely names ``a`` and ``b`` refer to the same person.

    ``a`` is the incoming (external) name and ``b`` the known name; only
    the containment signal weighs the two directions differently.

    Args:
        a: Name from the uploaded file
        b: Name of the known record
        weights: Scoring constants

    Returns:
        NameSimilarityResult with score clamped to 0-100 and reasons in
        the order the signals were evaluated
    """
    full_a = normalize_name(a)
    full_b = normalize_name(b)

    if full_a == full_b:
        return NameSimilarityResult(score=100, reasons=["Exact name match"])

    parts_a = split_name(full_a)
    parts_b = split_name(full_b)
    score = 0
    reasons: list[str] = []

    if parts_a.first and parts_a.first == parts_b.first:
        score += weights.first_exact
        reasons.append("First name matches exactly")

    if parts_a.last and parts_a.last == parts_b.last:
        score += weights.last_exact
        reasons.append("Last name matches exactly")

    if parts_a.first and parts_b.first:
        first_sim = token_similarity(parts_a.first, parts_b.first)
        if weights.similar_min <= first_sim < 100:
            score += _round_half_up(first_sim * weights.first_similar_factor)
            reasons.append(f"First name similar ({first_sim}%)")

    if parts_a.last and parts_b.last:
        last_sim = token_similarity(parts_a.last, parts_b.last)
        if weights.similar_min <= last_sim < 100:
            score += _round_half_up(last_sim * weights.last_similar_factor)
            reasons.append(f"Last name similar ({last_sim}%)")
        elif weights.somewhat_similar_min <= last_sim < weights.similar_min:
            # Near-miss surnames such as "Adamson" / "Adams"
            score += _round_half_up(last_sim * weights.last_somewhat_similar_factor)
            reasons.append(f"Last name somewhat similar ({last_sim}%)")

    if full_b and full_b in full_a:
        score += weights.contains_other
        reasons.append("Name contains known name")
    if full_a and full_a in full_b:
        score += weights.contained_in_other
        reasons.append("Name contained in known name")

    if parts_b.first and parts_b.last:
        has_first = parts_b.first in full_a
        has_last = parts_b.last in full_a
        if has_first and has_last:
            score += weights.both_tokens_present
            reasons.append("Contains both first and last name")
        elif has_first or has_last:
            score += weights.one_token_present
            reasons.append("Contains part of the name")

    all_parts = parts_a.first and parts_a.last and parts_b.first and parts_b.last
    if all_parts:
        if parts_a.first == parts_b.last and parts_a.last == parts_b.first:
            score = max(score, weights.reversed_order_floor)
            reasons.append("Names match in reversed order")

        if parts_a.first[0] + parts_a.last[0] == parts_b.first[0] + parts_b.last[0]:
            score += weights.same_initials
            reasons.append("Same initials")

    return NameSimilarityResult(score=max(0, min(score, 100)), reasons=reasons)
