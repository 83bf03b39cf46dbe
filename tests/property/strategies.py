"""
Custom Hypothesis Strategies for Versification Data

Generates verses that exist in two small schemes and mapping tables
between them.
"""
from typing import List, Tuple

from hypothesis import strategies as st

from versification import VerseReference, Versification

# =============================================================================
# SCHEMES
# =============================================================================

LEFT = Versification("KJV", {
    "Gen": [31, 25, 24],
    "Ps": [6, 12, 8, 8],
    "Mal": [14, 17, 18, 6],
})

RIGHT = Versification("Synodal", {
    "Gen": [31, 25, 24],
    "Ps": [6, 13, 9, 8],
    "Mal": [14, 17, 24],
})


@st.composite
def verse_strategy(draw, versification: Versification = LEFT, allow_zero: bool = True) -> VerseReference:
    """Generate a verse that exists in the given versification."""
    book = draw(st.sampled_from(versification.books))
    chapter = draw(st.integers(min_value=1, max_value=versification.chapter_count(book)))
    first = 0 if allow_zero else 1
    verse = draw(st.integers(min_value=first, max_value=versification.last_verse(book, chapter)))
    return VerseReference(versification, book, chapter, verse)


def pair_strategy() -> st.SearchStrategy:
    """Generate a (left verse, right verse) mapping pair."""
    return st.tuples(verse_strategy(LEFT), verse_strategy(RIGHT))


def pairs_strategy(max_size: int = 30) -> st.SearchStrategy:
    """Generate a mapping table; duplicates on either side are likely."""
    return st.lists(pair_strategy(), min_size=1, max_size=max_size)


@st.composite
def shuffled_pairs_strategy(draw, max_size: int = 30) -> Tuple[List, List]:
    """Generate a mapping table and a permutation of it."""
    pairs = draw(pairs_strategy(max_size))
    return pairs, draw(st.permutations(pairs))


def as_entries(pairs) -> List[Tuple[str, str]]:
    """Render verse pairs as raw mapping entries."""
    return [(left.osis_ref, right.osis_ref) for left, right in pairs]
