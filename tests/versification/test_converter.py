"""
Tests for VersificationConverter.
"""
import pytest

from core.errors import UnsupportedConversionError
from versification import (
    InMemoryMappingSource,
    VerseReference,
    VersificationConverter,
    VersificationMapping,
)


@pytest.fixture
def converter(kjv_synodal):
    return VersificationConverter([kjv_synodal])


class TestVersificationConverter:
    """Tests for VersificationConverter."""

    def test_convert_forward_and_back(self, converter, kjv, synodal):
        kjv_verse = VerseReference(kjv, "Mal", 4, 1)
        synodal_verse = converter.convert(kjv_verse, synodal)

        assert synodal_verse == VerseReference(synodal, "Mal", 3, 19)
        assert converter.convert(synodal_verse, kjv) == kjv_verse

    def test_same_versification_is_unchanged(self, converter, kjv, counting_source):
        verse = VerseReference(kjv, "Gen", 1, 1)

        assert converter.convert(verse, kjv) is verse
        assert counting_source.calls == {}

    def test_unsupported_pair(self, converter, kjv, vulgate):
        verse = VerseReference(kjv, "Gen", 1, 1)

        with pytest.raises(UnsupportedConversionError) as exc_info:
            converter.convert(verse, vulgate)

        error = exc_info.value
        assert error.from_name == "KJV"
        assert error.to_name == "Vulg"
        assert error.context.verse_ref == "Gen.1.1"

    def test_can_convert(self, converter, kjv, synodal, vulgate):
        assert converter.can_convert(kjv, synodal)
        assert converter.can_convert(synodal, kjv)
        assert converter.can_convert(vulgate, vulgate)
        assert not converter.can_convert(kjv, vulgate)

    def test_add_routes_to_matching_mapping(self, converter, kjv, synodal, vulgate):
        kjv_vulgate = VersificationMapping(
            kjv, vulgate, InMemoryMappingSource({"KJVToVulg.properties": [("Gen.1.2", "Gen.1.1")]})
        )

        assert converter.add(kjv_vulgate) is converter
        assert converter.find_mapping(vulgate, kjv) is kjv_vulgate
        assert converter.convert(VerseReference(kjv, "Gen", 1, 2), vulgate) == VerseReference(vulgate, "Gen", 1, 1)
        assert len(converter.mappings) == 2

    def test_find_mapping_missing(self, kjv, synodal):
        assert VersificationConverter().find_mapping(kjv, synodal) is None
