"""
Versify - Versification Mapping

Maps verses between two versifications using mapping data supplied by a
mapping source. The mapping table is large, so it is only loaded the first
time a verse is translated, and only once per mapping even when many
threads translate concurrently.

Usage:
    from versification.mapping import VersificationMapping
    from versification.sources import DirectoryMappingSource

    mapping = VersificationMapping("KJV", "Synodal", DirectoryMappingSource("./maps"))
    if mapping.can_convert(kjv, synodal):
        synodal_verse = mapping.translate(kjv_verse, synodal)
"""
from __future__ import annotations

import threading
from typing import NamedTuple, Optional, Union

from core.errors import MappingSourceError
from core.types import Result
from observability.logging import get_logger
from observability.tracing import create_span
from versification.reference import VerseReference, parse_reference
from versification.scheme import Versification, VersificationRegistry, get_registry
from versification.sources import MappingEntry, MappingSource
from versification.two_way import TwoWayVerseMap

logger = get_logger(__name__)

# Letters appended to split verses, e.g. Gen.3.16a / Gen.3.16b
SUFFIX_LETTERS = "abcde"

VersificationLike = Union[Versification, str]


class MappingStats(NamedTuple):
    """Outcome of loading a mapping table."""

    loaded: int
    skipped: int


def tidy_verse(text: str) -> str:
    """Remove a trailing a-e letter from a verse string."""
    if text and text[-1] in SUFFIX_LETTERS:
        return text[:-1]
    return text


class VersificationMapping:
    """
    Map verses between a left and a right versification.

    The left/right order names the mapping table
    ("{left}To{right}.properties"); translation works in both directions.
    """

    def __init__(
        self,
        left: VersificationLike,
        right: VersificationLike,
        source: MappingSource,
        registry: Optional[VersificationRegistry] = None,
    ):
        registry = registry or get_registry()
        self.left = registry.get(left) if isinstance(left, str) else left
        self.right = registry.get(right) if isinstance(right, str) else right
        self.source = source

        self._verse_map: Optional[TwoWayVerseMap] = None
        self._stats: Optional[MappingStats] = None
        self._lock = threading.Lock()

    @property
    def properties_file_name(self) -> str:
        return f"{self.left.name}To{self.right.name}.properties"

    @property
    def is_initialized(self) -> bool:
        return self._verse_map is not None

    @property
    def stats(self) -> Optional[MappingStats]:
        return self._stats

    def can_convert(self, from_versification: Versification, to_versification: Versification) -> bool:
        return (
            (from_versification == self.left and to_versification == self.right)
            or (from_versification == self.right and to_versification == self.left)
        )

    def translate(self, verse: VerseReference, to_versification: Versification) -> VerseReference:
        """
        Map a verse into the other versification of this mapping.

        Callers are expected to check can_convert first; any target other
        than the right versification is treated as the left one.

        Args:
            verse: Verse in one of the two versifications
            to_versification: Versification to map into

        Returns:
            The mapped verse, or the same address relabelled with
            to_versification when no mapping applies
        """
        verse_map = self._get_verse_map()
        forward = to_versification == self.right

        mapped = _lookup(verse_map, verse, forward)

        # No rule for verse 0 but a rule for verse 1: follow verse 1 to its chapter
        # so scrolling above v1 does not land in a different chapter than v1 does.
        if mapped is None and verse.verse == 0:
            mapped_verse1 = _lookup(verse_map, verse.with_verse(1), forward)
            if mapped_verse1 is not None:
                mapped = mapped_verse1.with_verse(0)

        if mapped is None:
            mapped = VerseReference(to_versification, verse.book, verse.chapter, verse.verse)
        return mapped

    def load(self) -> MappingStats:
        """Build the mapping table now instead of on the first translation."""
        self._get_verse_map()
        return self._stats

    def _get_verse_map(self) -> TwoWayVerseMap:
        verse_map = self._verse_map
        if verse_map is None:
            with self._lock:
                verse_map = self._verse_map
                if verse_map is None:
                    verse_map = self._load_mapping_data()
                    self._verse_map = verse_map
        return verse_map

    def _load_mapping_data(self) -> TwoWayVerseMap:
        key = self.properties_file_name
        logger.debug("Loading mapping data", mapping=str(self), key=key)

        with create_span(
            "versification.mapping.build",
            attributes={"mapping.key": key},
        ) as span:
            verse_map = TwoWayVerseMap()
            loaded = skipped = 0

            try:
                entries = self.source.entries(key)
            except MappingSourceError as e:
                raise e.with_context(mapping=str(self))

            for entry in entries:
                pair = self._parse_entry(entry)
                if pair.is_failure:
                    skipped += 1
                    logger.error("Bad verse in mapping data", mapping=str(self), entry=f"{entry.left}={entry.right}", error=pair.error)
                    continue
                left_verse, right_verse = pair.value
                verse_map.add_using_lowest(left_verse, right_verse)
                loaded += 1

            span.set_attribute("mapping.loaded", loaded)
            span.set_attribute("mapping.skipped", skipped)

        self._stats = MappingStats(loaded, skipped)
        logger.info("Mapping data loaded", mapping=str(self), loaded=loaded, skipped=skipped)
        return verse_map

    def _parse_entry(self, entry: MappingEntry) -> Result:
        left = parse_reference(self.left, tidy_verse(entry.left))
        if left.is_failure:
            return left
        right = parse_reference(self.right, tidy_verse(entry.right))
        return right.map(lambda right_verse: (left.value, right_verse))

    def __str__(self) -> str:
        return f"{self.left.name}{self.right.name}Mapping"

    def __repr__(self) -> str:
        return f"VersificationMapping({self.left.name!r}, {self.right.name!r}, initialized={self.is_initialized})"


def _lookup(verse_map: TwoWayVerseMap, verse: VerseReference, forward: bool) -> Optional[VerseReference]:
    if forward:
        return verse_map.get_forward(verse)
    return verse_map.get_backward(verse)
