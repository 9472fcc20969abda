"""Tests for BijectiveMap."""

from roster_match.review.bijection import BijectiveMap


class TestBijectiveMap:
    """Tests for BijectiveMap."""

    def test_assign_and_lookup(self):
        mapping: BijectiveMap[str, str] = BijectiveMap()

        assert mapping.assign("k1", "v1") is None
        assert mapping.get("k1") == "v1"
        assert mapping.key_for("v1") == "k1"
        assert "k1" in mapping
        assert len(mapping) == 1

    def test_assigning_held_value_moves_it(self):
        mapping: BijectiveMap[str, str] = BijectiveMap()
        mapping.assign("k1", "v1")

        displaced = mapping.assign("k2", "v1")

        assert displaced == "k1"
        assert mapping.get("k1") is None
        assert mapping.key_for("v1") == "k2"
        assert mapping.as_dict() == {"k2": "v1"}

    def test_reassigning_key_frees_old_value(self):
        mapping: BijectiveMap[str, str] = BijectiveMap()
        mapping.assign("k1", "v1")

        mapping.assign("k1", "v2")

        assert not mapping.holds("v1")
        assert mapping.key_for("v2") == "k1"

    def test_reassigning_same_pair_is_noop(self):
        mapping: BijectiveMap[str, str] = BijectiveMap()
        mapping.assign("k1", "v1")

        assert mapping.assign("k1", "v1") is None
        assert mapping.items() == [("k1", "v1")]

    def test_unassign(self):
        mapping: BijectiveMap[str, str] = BijectiveMap()
        mapping.assign("k1", "v1")

        assert mapping.unassign("k1") == "v1"
        assert mapping.unassign("k1") is None
        assert not mapping.holds("v1")
        assert len(mapping) == 0

    def test_values_unique_after_many_moves(self):
        mapping: BijectiveMap[str, str] = BijectiveMap()
        moves = [("a", "x"), ("b", "x"), ("c", "y"), ("a", "y"), ("b", "z"), ("c", "x")]

        for key, value in moves:
            mapping.assign(key, value)

        values = list(mapping.as_dict().values())
        assert len(values) == len(set(values))
        assert mapping.as_dict() == {"a": "y", "b": "z", "c": "x"}
