"""
Tests for the two-way verse map.
"""
import pytest

from versification import TwoWayVerseMap, VerseReference


@pytest.fixture
def ref(kjv, synodal):
    """Build references: ref("kjv", "Gen", 3, 16)."""
    schemes = {"kjv": kjv, "synodal": synodal}

    def make(scheme, book, chapter, verse):
        return VerseReference(schemes[scheme], book, chapter, verse)

    return make


class TestTwoWayVerseMap:
    """Tests for TwoWayVerseMap."""

    def test_pair_reachable_both_ways(self, ref):
        verse_map = TwoWayVerseMap()
        left = ref("kjv", "Mal", 4, 1)
        right = ref("synodal", "Mal", 3, 19)

        verse_map.add_using_lowest(left, right)

        assert verse_map.get_forward(left) == right
        assert verse_map.get_backward(right) == left

    def test_missing_lookup_returns_none(self, ref):
        verse_map = TwoWayVerseMap()
        verse_map.add_using_lowest(ref("kjv", "Gen", 1, 1), ref("synodal", "Gen", 1, 1))

        assert verse_map.get_forward(ref("kjv", "Gen", 1, 2)) is None
        assert verse_map.get_backward(ref("synodal", "Gen", 1, 2)) is None

    def test_lookup_is_exact_no_versification_crossover(self, ref):
        verse_map = TwoWayVerseMap()
        verse_map.add_using_lowest(ref("kjv", "Ps", 3, 1), ref("synodal", "Ps", 3, 2))

        # Same address, wrong versification
        assert verse_map.get_forward(ref("synodal", "Ps", 3, 1)) is None
        assert verse_map.get_backward(ref("kjv", "Ps", 3, 2)) is None

    def test_lowest_target_wins_when_higher_comes_first(self, ref):
        verse_map = TwoWayVerseMap()
        source = ref("kjv", "Gen", 3, 16)

        verse_map.add_using_lowest(source, ref("synodal", "Exod", 4, 17))
        verse_map.add_using_lowest(source, ref("synodal", "Exod", 4, 16))

        assert verse_map.get_forward(source) == ref("synodal", "Exod", 4, 16)

    def test_lowest_target_kept_when_higher_comes_later(self, ref):
        verse_map = TwoWayVerseMap()
        source = ref("kjv", "Gen", 3, 16)

        verse_map.add_using_lowest(source, ref("synodal", "Exod", 4, 16))
        verse_map.add_using_lowest(source, ref("synodal", "Exod", 4, 17))

        assert verse_map.get_forward(source) == ref("synodal", "Exod", 4, 16)

    def test_chapter_compares_before_verse(self, ref):
        verse_map = TwoWayVerseMap()
        source = ref("kjv", "Gen", 3, 1)

        verse_map.add_using_lowest(source, ref("synodal", "Gen", 4, 1))
        verse_map.add_using_lowest(source, ref("synodal", "Gen", 3, 24))

        assert verse_map.get_forward(source) == ref("synodal", "Gen", 3, 24)

    def test_directions_resolve_independently(self, ref):
        verse_map = TwoWayVerseMap()
        a = ref("kjv", "Ps", 3, 1)
        b = ref("kjv", "Ps", 3, 2)
        target_low = ref("synodal", "Ps", 3, 2)
        target_high = ref("synodal", "Ps", 3, 3)

        # b claims target_low first; a is a lower source for the same target
        verse_map.add_using_lowest(b, target_low)
        verse_map.add_using_lowest(a, target_low)
        verse_map.add_using_lowest(a, target_high)

        # Forward: a keeps its lowest target
        assert verse_map.get_forward(a) == target_low
        assert verse_map.get_forward(b) == target_low
        # Backward: target_low keeps the lowest source, target_high only has a
        assert verse_map.get_backward(target_low) == a
        assert verse_map.get_backward(target_high) == a

    def test_pair_can_win_forward_and_lose_backward(self, ref):
        verse_map = TwoWayVerseMap()
        left_low = ref("kjv", "Gen", 3, 15)
        left_high = ref("kjv", "Gen", 3, 16)
        right = ref("synodal", "Gen", 3, 16)

        verse_map.add_using_lowest(left_high, right)
        verse_map.add_using_lowest(left_low, right)

        # left_high -> right is the only forward entry for left_high
        assert verse_map.get_forward(left_high) == right
        # but the backward entry for right belongs to the lower source
        assert verse_map.get_backward(right) == left_low

    def test_reinserting_losing_pair_changes_nothing(self, ref):
        verse_map = TwoWayVerseMap()
        source = ref("kjv", "Gen", 3, 16)
        low = ref("synodal", "Exod", 4, 16)
        high = ref("synodal", "Exod", 4, 17)

        verse_map.add_using_lowest(source, low)
        verse_map.add_using_lowest(source, high)
        verse_map.add_using_lowest(source, high)

        assert verse_map.get_forward(source) == low
        assert len(verse_map) == 1

    def test_len_counts_forward_sources(self, ref):
        verse_map = TwoWayVerseMap()
        verse_map.add_using_lowest(ref("kjv", "Gen", 1, 1), ref("synodal", "Gen", 1, 1))
        verse_map.add_using_lowest(ref("kjv", "Gen", 1, 2), ref("synodal", "Gen", 1, 2))

        assert len(verse_map) == 2
