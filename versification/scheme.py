"""
Versify - Versification Schemes

A versification is a numbering convention that assigns chapter and verse
addresses to a fixed canonical text. Each scheme knows its books and the
last verse of every chapter, and can tell whether an address exists.

Usage:
    from versification.scheme import Versification, get_registry

    kjv = Versification.from_dict("KJV", {"Gen": [31, 25, 24]})
    get_registry().register(kjv)
    kjv.validate("Gen", 3, 16)
"""
from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from core.errors import ErrorContext, NoSuchVerseError, SchemeLoadError, UnknownVersificationError
from core.types import BookId, VersificationName
from observability.logging import get_logger

logger = get_logger(__name__)


class Versification:
    """
    Immutable versification handle.

    Equality and hashing use the scheme name only, so two handles loaded
    from the same data compare equal.
    """

    __slots__ = ("_name", "_books", "_book_lookup", "_book_order")

    def __init__(self, name: VersificationName, books: Mapping[BookId, Sequence[int]]):
        if not name:
            raise ValueError("Versification name cannot be empty")
        self._name = name
        self._books: Dict[BookId, Tuple[int, ...]] = {
            book: tuple(int(v) for v in last_verses)
            for book, last_verses in books.items()
        }
        self._book_lookup = {book.lower(): book for book in self._books}
        self._book_order = {book: i for i, book in enumerate(self._books)}

    @classmethod
    def from_dict(cls, name: VersificationName, data: Mapping[str, Sequence[int]]) -> "Versification":
        """Build a scheme from {book: [last verse of chapter 1, ...]}."""
        return cls(name, data)

    @property
    def name(self) -> VersificationName:
        return self._name

    @property
    def books(self) -> List[BookId]:
        return list(self._books)

    def book_index(self, book: BookId) -> int:
        """Canonical position of a book; unknown books sort after all known ones."""
        try:
            return self._book_order[book]
        except KeyError:
            return len(self._book_order)

    def chapter_count(self, book: BookId) -> int:
        return len(self._books.get(book, ()))

    def last_verse(self, book: BookId, chapter: int) -> int:
        """Last verse number of a chapter, or 0 when the chapter does not exist."""
        chapters = self._books.get(book, ())
        if 1 <= chapter <= len(chapters):
            return chapters[chapter - 1]
        return 0

    def find_book(self, token: str) -> Optional[BookId]:
        """Resolve a book token case-insensitively to its canonical id."""
        return self._book_lookup.get(token.strip().lower())

    def validate(self, book: BookId, chapter: int, verse: int) -> None:
        """
        Check that an address exists in this versification.

        Verse 0 addresses the chapter heading and is legal for every
        existing chapter.

        Raises:
            NoSuchVerseError: If the book, chapter or verse is out of range
        """
        ref = f"{book}.{chapter}.{verse}"
        if book not in self._books:
            raise NoSuchVerseError(
                f"Book '{book}' is not in {self._name}",
                text=ref,
                versification=self._name,
            )
        chapters = self._books[book]
        if chapter < 1 or chapter > len(chapters):
            raise NoSuchVerseError(
                f"Chapter {chapter} out of range for {book} in {self._name} (1-{len(chapters)})",
                text=ref,
                versification=self._name,
            )
        last = chapters[chapter - 1]
        if verse < 0 or verse > last:
            raise NoSuchVerseError(
                f"Verse {verse} out of range for {book}.{chapter} in {self._name} (0-{last})",
                text=ref,
                versification=self._name,
            )

    def is_valid(self, book: BookId, chapter: int, verse: int) -> bool:
        try:
            self.validate(book, chapter, verse)
            return True
        except NoSuchVerseError:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Versification):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Versification({self._name!r}, books={len(self._books)})"

    def __str__(self) -> str:
        return self._name


class VersificationRegistry:
    """
    Resolves versification names to scheme handles.

    Usage:
        registry = VersificationRegistry()
        registry.load_directory(Path("./schemes"))
        kjv = registry.get("KJV")
    """

    def __init__(self, schemes: Iterable[Versification] = ()):
        self._schemes: Dict[VersificationName, Versification] = {}
        self._lock = threading.Lock()
        for scheme in schemes:
            self.register(scheme)

    def register(self, scheme: Versification) -> Versification:
        with self._lock:
            self._schemes[scheme.name] = scheme
        return scheme

    def get(self, name: VersificationName) -> Versification:
        """
        Raises:
            UnknownVersificationError: If no scheme has that name
        """
        try:
            return self._schemes[name]
        except KeyError:
            raise UnknownVersificationError(name, known=list(self._schemes)) from None

    def names(self) -> List[VersificationName]:
        return sorted(self._schemes)

    def load_directory(self, path: Union[str, Path]) -> List[Versification]:
        """
        Register every <Name>.json scheme file found in a directory.

        Raises:
            SchemeLoadError: If a scheme file cannot be read or is malformed
        """
        directory = Path(path)
        loaded = []
        for scheme_file in sorted(directory.glob("*.json")):
            loaded.append(self.register(_read_scheme(scheme_file)))
            logger.debug("Versification loaded", versification=scheme_file.stem, path=str(scheme_file))
        logger.info("Versifications loaded", count=len(loaded), directory=str(directory))
        return loaded

    def __contains__(self, name: object) -> bool:
        return name in self._schemes

    def __len__(self) -> int:
        return len(self._schemes)


# Global registry instance
_registry: Optional[VersificationRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> VersificationRegistry:
    """Get the process-wide versification registry."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = VersificationRegistry()
    return _registry


def set_registry(registry: Optional[VersificationRegistry]) -> None:
    """Replace the process-wide registry (None resets it)."""
    global _registry
    with _registry_lock:
        _registry = registry


def _read_scheme(scheme_file: Path) -> Versification:
    """Build the scheme stored in <Name>.json: {book: [last verse per chapter]}."""
    try:
        with open(scheme_file, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected an object of books, got {type(data).__name__}")
        return Versification.from_dict(scheme_file.stem, data)
    except (OSError, ValueError, TypeError) as e:
        raise SchemeLoadError(
            f"Cannot load versification '{scheme_file.stem}' from {scheme_file}",
            path=str(scheme_file),
            cause=e,
            context=ErrorContext.from_current_span(
                "load_directory",
                "VersificationRegistry",
                versification=scheme_file.stem,
                metadata={"path": str(scheme_file)},
            ),
        ) from e
