"""
Versify - Versification Mapping

Translates verse references between versifications, the numbering schemes
that disagree on chapter and verse boundaries for the same text.

Usage:
    from versification import (
        VersificationMapping, DirectoryMappingSource, get_registry,
        reference_from_string,
    )

    registry = get_registry()
    registry.load_directory("./schemes")
    kjv, synodal = registry.get("KJV"), registry.get("Synodal")

    mapping = VersificationMapping(kjv, synodal, DirectoryMappingSource("./maps"))
    verse = reference_from_string(kjv, "Ps.51.1")
    print(mapping.translate(verse, synodal))
"""

from versification.scheme import (
    Versification,
    VersificationRegistry,
    get_registry,
    set_registry,
)
from versification.reference import (
    VerseReference,
    parse_reference,
    reference_from_string,
)
from versification.sources import (
    MappingEntry,
    MappingSource,
    DirectoryMappingSource,
    InMemoryMappingSource,
    parse_properties_line,
)
from versification.two_way import TwoWayVerseMap
from versification.mapping import (
    MappingStats,
    VersificationMapping,
    tidy_verse,
)
from versification.converter import VersificationConverter


__all__ = [
    # Schemes
    "Versification",
    "VersificationRegistry",
    "get_registry",
    "set_registry",
    # References
    "VerseReference",
    "parse_reference",
    "reference_from_string",
    # Sources
    "MappingEntry",
    "MappingSource",
    "DirectoryMappingSource",
    "InMemoryMappingSource",
    "parse_properties_line",
    # Mapping
    "TwoWayVerseMap",
    "MappingStats",
    "VersificationMapping",
    "tidy_verse",
    "VersificationConverter",
]
