"""
Versify - Versification Converter

Routes verses between any pair of versifications for which a mapping is
registered. Unlike VersificationMapping.translate, the converter checks the
pair and refuses conversions it has no mapping for.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from core.errors import ErrorContext, UnsupportedConversionError
from versification.mapping import VersificationMapping
from versification.reference import VerseReference
from versification.scheme import Versification


class VersificationConverter:
    """Dispatches conversions to the mapping that covers the pair."""

    def __init__(self, mappings: Iterable[VersificationMapping] = ()):
        self._mappings: List[VersificationMapping] = list(mappings)

    def add(self, mapping: VersificationMapping) -> "VersificationConverter":
        self._mappings.append(mapping)
        return self

    @property
    def mappings(self) -> List[VersificationMapping]:
        return list(self._mappings)

    def find_mapping(
        self,
        from_versification: Versification,
        to_versification: Versification,
    ) -> Optional[VersificationMapping]:
        for mapping in self._mappings:
            if mapping.can_convert(from_versification, to_versification):
                return mapping
        return None

    def can_convert(self, from_versification: Versification, to_versification: Versification) -> bool:
        return (
            from_versification == to_versification
            or self.find_mapping(from_versification, to_versification) is not None
        )

    def convert(self, verse: VerseReference, to_versification: Versification) -> VerseReference:
        """
        Raises:
            UnsupportedConversionError: If no mapping covers the pair
        """
        if verse.versification == to_versification:
            return verse

        mapping = self.find_mapping(verse.versification, to_versification)
        if mapping is None:
            raise UnsupportedConversionError(
                verse.versification.name,
                to_versification.name,
                context=ErrorContext.from_current_span(
                    "convert",
                    "VersificationConverter",
                    verse_ref=verse.osis_ref,
                    versification=verse.versification.name,
                ),
            )
        return mapping.translate(verse, to_versification)
