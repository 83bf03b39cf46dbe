"""
Versify - Verse References

A verse reference is a single verse address qualified by the versification
it is expressed in. Verse 0 addresses the start of a chapter (its heading).

Usage:
    from versification.reference import parse_reference

    result = parse_reference(kjv, "Gen.3.16")
    if result.is_success:
        verse = result.value
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Tuple

from core.errors import NoSuchVerseError
from core.types import BookId, OsisRef, Result
from versification.scheme import Versification

# Book.Chapter.Verse, Book Chapter:Verse, or Book.Chapter (verse 0)
REFERENCE_PATTERN = re.compile(
    r"^\s*([1-4]?[A-Za-z]+)[.\s]\s*(\d+)(?:[.:](\d+))?\s*$"
)


@dataclass(frozen=True)
class VerseReference:
    """Immutable verse address; equal when all four fields are equal."""

    versification: Versification
    book: BookId
    chapter: int
    verse: int

    @property
    def osis_ref(self) -> OsisRef:
        return f"{self.book}.{self.chapter}.{self.verse}"

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Canonical order within the versification: book, chapter, verse."""
        return (self.versification.book_index(self.book), self.chapter, self.verse)

    def with_verse(self, verse: int) -> "VerseReference":
        return replace(self, verse=verse)

    def with_versification(self, versification: Versification) -> "VerseReference":
        return replace(self, versification=versification)

    def __str__(self) -> str:
        return f"{self.osis_ref} ({self.versification.name})"


def parse_reference(versification: Versification, text: str) -> Result[VerseReference]:
    """
    Parse text into a reference that exists in the given versification.

    Never raises; failures carry a NoSuchVerseError.
    """
    match = REFERENCE_PATTERN.match(text or "")
    if not match:
        return Result.from_exception(NoSuchVerseError(
            f"Cannot parse '{text}' as a verse reference",
            text=text,
            versification=versification.name,
        ))

    book = versification.find_book(match.group(1))
    if book is None:
        return Result.from_exception(NoSuchVerseError(
            f"Unknown book '{match.group(1)}' in {versification.name}",
            text=text,
            versification=versification.name,
        ))

    chapter = int(match.group(2))
    verse = int(match.group(3)) if match.group(3) is not None else 0
    try:
        versification.validate(book, chapter, verse)
    except NoSuchVerseError as e:
        return Result.from_exception(e)

    return Result.success(VerseReference(versification, book, chapter, verse))


def reference_from_string(versification: Versification, text: str) -> VerseReference:
    """
    Parse text into a reference, raising on failure.

    Raises:
        NoSuchVerseError: If the text does not name a verse in the versification
    """
    return parse_reference(versification, text).unwrap()
