"""Tests for name similarity scoring."""

import pytest

from roster_match.identity.similarity import (
    ScoringWeights,
    normalize_name,
    similarity,
    split_name,
    token_similarity,
)

NAMES = [
    "John Smith",
    "Smith John",
    "Mary-Jane O'Neil Jr.",
    "Matthew James Young",
    "Matt Young",
    "Jon S.",
    "",
    "Cher",
    "Dr. Ada Lovelace III",
]


class TestNormalizeName:
    """Tests for normalize_name."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_name("  O'Neil,  MARY-Jane ") == "oneil maryjane"

    def test_removes_trailing_suffixes(self):
        assert normalize_name("Robert Jones Jr.") == "robert jones"
        assert normalize_name("Henry Ford III") == "henry ford"

    def test_keeps_suffix_tokens_elsewhere(self):
        """Only trailing generational suffixes are removed."""
        assert normalize_name("Iv Petrov") == "iv petrov"


class TestSplitName:
    """Tests for split_name."""

    def test_zero_tokens(self):
        assert split_name("") == ("", "", ())

    def test_one_token_is_first(self):
        assert split_name("cher") == ("cher", "", ())

    def test_two_tokens(self):
        assert split_name("ada lovelace") == ("ada", "lovelace", ())

    def test_middle_tokens(self):
        assert split_name("a b c d") == ("a", "d", ("b", "c"))


class TestTokenSimilarity:
    """Tests for token_similarity."""

    def test_identical(self):
        assert token_similarity("smith", "smith") == 100

    def test_empty_pair_scores_zero(self):
        assert token_similarity("", "") == 0

    def test_one_edit(self):
        # 1 substitution over 5 characters
        assert token_similarity("smith", "smyth") == 80

    def test_near_miss_surname(self):
        # adamson -> adams: 2 deletions over 7 characters
        assert token_similarity("adamson", "adams") == 71


class TestSimilarity:
    """Tests for similarity."""

    @pytest.mark.parametrize("name", NAMES)
    def test_identity_scores_100(self, name: str):
        assert similarity(name, name).score == 100

    @pytest.mark.parametrize("a", NAMES)
    @pytest.mark.parametrize("b", NAMES)
    def test_score_is_clamped(self, a: str, b: str):
        assert 0 <= similarity(a, b).score <= 100

    def test_exact_after_normalization(self):
        result = similarity("JOHN SMITH Jr.", "john smith")

        assert result.score == 100
        assert result.reasons == ["Exact name match"]

    def test_reversed_order_at_least_85(self):
        result = similarity("John Smith", "Smith John")

        assert result.score >= 85
        assert "Names match in reversed order" in result.reasons

    def test_first_and_last_exact(self):
        result = similarity("Matthew Young", "Matthew James Young")

        assert result.score == 100
        assert result.reasons[:2] == [
            "First name matches exactly",
            "Last name matches exactly",
        ]
        assert "Contains both first and last name" in result.reasons

    def test_short_first_name_scores_low(self):
        """'Matt Young' shares only the surname and initials."""
        result = similarity("Matthew Young", "Matt Young")

        assert result.score == 65
        assert result.reasons == [
            "Last name matches exactly",
            "Contains both first and last name",
            "Same initials",
        ]

    def test_similar_last_name(self):
        result = similarity("John Smyth", "John Smith")

        # 40 first + round(80 * 0.4) + one token present + initials
        assert result.score == 40 + 32 + 10 + 5
        assert "Last name similar (80%)" in result.reasons

    def test_somewhat_similar_last_name(self):
        result = similarity("Jane Adamson", "Jane Adams")

        assert "Last name somewhat similar (71%)" in result.reasons
        assert "Name contains known name" in result.reasons
        # 40 + 21 + 25 + 20 + 5 clamps to 100
        assert result.score == 100

    def test_unrelated_names_score_low(self):
        assert similarity("Michael Williams", "Jane Doe").score < 50

    def test_reasons_follow_evaluation_order(self):
        result = similarity("Jon Smith", "John Smith")

        assert result.score == 40 + 10 + 5
        assert result.reasons == [
            "Last name matches exactly",
            "Contains part of the name",
            "Same initials",
        ]

    def test_custom_weights(self):
        weights = ScoringWeights(first_exact=10, last_exact=10, same_initials=0)

        result = similarity("Matthew Young", "Matt Young", weights)

        assert result.score == 10 + 20

    def test_containment_weighs_direction(self):
        """The incoming name containing the known name weighs more."""
        contained = similarity("Bob Jones", "Bob Jones Smith")
        contains = similarity("Bob Jones Smith", "Bob Jones")

        assert "Name contained in known name" in contained.reasons
        assert contained.score == 40 + 20 + 10
        assert "Name contains known name" in contains.reasons
        assert contains.score == 40 + 25 + 20

    def test_similar_first_name(self):
        result = similarity("Jonathon Smith", "Jonathan Smith")

        # 40 last + round(88 * 0.3) + one token present + initials
        assert result.score == 40 + 26 + 10 + 5
        assert result.reasons == [
            "Last name matches exactly",
            "First name similar (88%)",
            "Contains part of the name",
            "Same initials",
        ]
