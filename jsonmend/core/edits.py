"""
Offset-based text edits.

Repairs that are discovered during a scan are recorded against the offsets
of the scanned text and applied afterwards, last offset first, so that no
edit shifts the offsets of another.
"""

from collections.abc import Iterable
from typing import NamedTuple


class Edit(NamedTuple):
    """Replace text[start:end] with replacement. start == end inserts."""

    start: int
    end: int
    replacement: str

    @classmethod
    def insert(cls, position: int, text: str) -> "Edit":
        return cls(position, position, text)


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """Apply non-overlapping edits in descending offset order."""
    result = text
    for edit in sorted(edits, key=lambda e: (e.start, e.end), reverse=True):
        result = result[: edit.start] + edit.replacement + result[edit.end :]
    return result
