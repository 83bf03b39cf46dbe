"""
Versify - Two-Way Verse Map

Holds verse-to-verse associations between two versifications in both
directions. When several entries share a source verse, the lowest target
wins, so the result does not depend on the order of the mapping data.
"""
from __future__ import annotations

from typing import Dict, Optional

from versification.reference import VerseReference


class TwoWayVerseMap:
    """Forward (left -> right) and backward (right -> left) lookup tables."""

    def __init__(self) -> None:
        self._forward: Dict[VerseReference, VerseReference] = {}
        self._backward: Dict[VerseReference, VerseReference] = {}

    def add_using_lowest(self, left: VerseReference, right: VerseReference) -> None:
        """
        Add a pair, keeping the lowest target when a source is already mapped.

        Each direction is resolved on its own: a pair can win forward and
        lose backward.
        """
        _put_lowest(self._forward, left, right)
        _put_lowest(self._backward, right, left)

    def get_forward(self, left: VerseReference) -> Optional[VerseReference]:
        return self._forward.get(left)

    def get_backward(self, right: VerseReference) -> Optional[VerseReference]:
        return self._backward.get(right)

    def __len__(self) -> int:
        return len(self._forward)

    def __repr__(self) -> str:
        return f"TwoWayVerseMap(forward={len(self._forward)}, backward={len(self._backward)})"


def _put_lowest(
    table: Dict[VerseReference, VerseReference],
    key: VerseReference,
    value: VerseReference,
) -> None:
    existing = table.get(key)
    if existing is None or value.sort_key < existing.sort_key:
        table[key] = value
