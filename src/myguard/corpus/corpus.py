"""
Read-only reference corpus of labeled clauses.
"""

from collections.abc import Iterable, Iterator

from myguard.models.verdict import ReferenceRecord


class LabeledCorpus:
    """
    Immutable, in-memory collection of reference records.

    Built once before any analysis runs and shared by reference between
    concurrent analyses without locking.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[ReferenceRecord]):
        self._records: tuple[ReferenceRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ReferenceRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"LabeledCorpus(records={len(self._records)})"
