"""Clause segmentation for raw contract text."""

import re
from collections.abc import Iterator

# A clause is any run of text between full stops and newlines
_SEGMENT_PATTERN = re.compile(r"[^.\n]+")


class ClauseSegments:
    """
    Lazy view over the clauses of a document.

    Each iteration rescans the text, so the sequence can be walked any
    number of times.
    """

    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[str]:
        for match in _SEGMENT_PATTERN.finditer(self.text):
            clause = match.group().strip()
            if clause:
                yield clause

    def __repr__(self) -> str:
        return f"ClauseSegments(chars={len(self.text)})"


def segment_clauses(text: str | None) -> ClauseSegments:
    """Split document text on '.' and newlines into trimmed, non-empty clauses."""
    return ClauseSegments(text or "")
