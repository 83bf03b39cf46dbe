"""
Versify - Mapping Sources

A mapping source supplies the raw (left, right) text pairs for a named
mapping table, e.g. "KJVToSynodal.properties". Parsing the text into verse
references is left to the mapping that consumes the entries.

Usage:
    from versification.sources import DirectoryMappingSource

    source = DirectoryMappingSource("./versificationmaps")
    for entry in source.entries("KJVToSynodal.properties"):
        print(entry.left, entry.right)
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from core.errors import ErrorContext, MappingSourceError
from observability.logging import get_logger

logger = get_logger(__name__)

COMMENT_PREFIXES = ("#", "!")
SEPARATORS = ("=", ":")


class MappingEntry(NamedTuple):
    """Raw mapping line as written in the source, before tidying."""

    left: str
    right: str


@runtime_checkable
class MappingSource(Protocol):
    """Provider of raw mapping entries keyed by table name."""

    def entries(self, key: str) -> Iterable[MappingEntry]:
        """Return every entry of the named table."""
        ...


def parse_properties_line(line: str) -> Optional[MappingEntry]:
    """
    Split one properties-style line into an entry.

    Returns None for blank and comment lines.

    Raises:
        ValueError: If the line has no separator or an empty side
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_PREFIXES):
        return None

    positions = [stripped.find(sep) for sep in SEPARATORS if sep in stripped]
    if not positions:
        raise ValueError(f"No separator in line: {stripped!r}")
    split_at = min(positions)

    left = stripped[:split_at].strip()
    right = stripped[split_at + 1:].strip()
    if not left or not right:
        raise ValueError(f"Empty key or value in line: {stripped!r}")
    return MappingEntry(left, right)


class DirectoryMappingSource:
    """Reads mapping tables from properties files in a directory."""

    def __init__(self, root: Union[str, Path], encoding: str = "utf-8"):
        self.root = Path(root)
        self.encoding = encoding

    def has_table(self, key: str) -> bool:
        return (self.root / key).is_file()

    def entries(self, key: str) -> List[MappingEntry]:
        """
        Raises:
            MappingSourceError: If the table file cannot be read
        """
        path = self.root / key
        try:
            with open(path, encoding=self.encoding) as f:
                lines = f.readlines()
        except OSError as e:
            raise MappingSourceError(
                f"Cannot read mapping table '{key}' from {self.root}",
                key=key,
                cause=e,
                context=ErrorContext.from_current_span(
                    "entries",
                    "DirectoryMappingSource",
                    metadata={"path": str(path)},
                ),
            ) from e

        entries = []
        for line_number, line in enumerate(lines, start=1):
            try:
                entry = parse_properties_line(line)
            except ValueError as e:
                logger.warning("Malformed mapping line", key=key, line=line_number, error=str(e))
                continue
            if entry is not None:
                entries.append(entry)

        logger.debug("Mapping table read", key=key, entries=len(entries), path=str(path))
        return entries

    def __repr__(self) -> str:
        return f"DirectoryMappingSource({str(self.root)!r})"


class InMemoryMappingSource:
    """Serves mapping tables held in memory."""

    def __init__(self, tables: Optional[Mapping[str, Sequence[Tuple[str, str]]]] = None):
        self._tables: Dict[str, List[MappingEntry]] = {}
        for key, pairs in (tables or {}).items():
            self.add_table(key, pairs)

    def add_table(self, key: str, pairs: Iterable[Tuple[str, str]]) -> None:
        self._tables[key] = [MappingEntry(left, right) for left, right in pairs]

    def has_table(self, key: str) -> bool:
        return key in self._tables

    def entries(self, key: str) -> List[MappingEntry]:
        """
        Raises:
            MappingSourceError: If no table has that key
        """
        try:
            return list(self._tables[key])
        except KeyError:
            raise MappingSourceError(
                f"No mapping table '{key}'",
                key=key,
                context=ErrorContext.from_current_span(
                    "entries",
                    "InMemoryMappingSource",
                    metadata={"tables": sorted(self._tables)},
                ),
            ) from None
