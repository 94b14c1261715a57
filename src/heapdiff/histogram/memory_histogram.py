"""
Memory histogram: per-class instance counts and sizes for one heap snapshot.

A MemoryHistogram keeps its entries in insertion order and can be looked up by
class name. Derived views (`filter`, `diff`, `get_top`) are returned as new,
independent histograms; `filter` and `diff` are sorted by descending size.
"""

import itertools
import logging
from typing import Any, Iterable, Iterator, List, Optional

import polars as pl

from ..models.entry import HistogramEntry
from .criteria import ExactName, NamePattern, NamePrefix, TypeName, as_criterion
from .ordered_map import OrderedMap

logger = logging.getLogger(__name__)

CSV_HEADER = "class,instances,size"


class MemoryHistogram:
    """
    Histogram of a set of classes, keyed by canonical class name.

    Adding an entry whose class name is already present replaces the stored
    entry without moving it. Apart from `add` a histogram is never modified;
    every query returns a new histogram.
    """

    def __init__(self, entries: Optional[Iterable[HistogramEntry]] = None):
        self._map: OrderedMap[str, HistogramEntry] = OrderedMap()
        if entries is not None:
            for entry in entries:
                self.add(entry)

    @classmethod
    def from_entries(cls, entries: Iterable[HistogramEntry]) -> "MemoryHistogram":
        return cls(entries)

    @classmethod
    def _sorted(cls, entries: List[HistogramEntry]) -> "MemoryHistogram":
        return cls(sorted(entries, key=HistogramEntry.sort_key))

    def add(self, entry: HistogramEntry) -> None:
        self._map.put(entry.class_name, entry)

    def get(self, class_name: str) -> Optional[HistogramEntry]:
        """Return the entry for ``class_name``, or None if the class is absent."""
        return self._map.get(class_name)

    def __contains__(self, class_name: object) -> bool:
        return class_name in self._map

    def __iter__(self) -> Iterator[HistogramEntry]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __bool__(self) -> bool:
        return len(self._map) > 0

    # --- Selection ---

    def filter_entries(self, *criteria: Any) -> List[HistogramEntry]:
        """
        Collect the entries matched by each criterion, in criteria order.

        Matches from every criterion are concatenated; an entry matched by two
        criteria appears twice.

        Raises:
            UnsupportedCriteriaError: If a criterion is not a class name, a
                ``prefix*`` wildcard, a compiled pattern or a type.
        """
        matched: List[HistogramEntry] = []
        for criterion in map(as_criterion, criteria):
            matched.extend(self._find_criterion(criterion))
        return matched

    def filter(self, *criteria: Any) -> "MemoryHistogram":
        """
        Select the entries matching any of the criteria, sorted by size.

        Args:
            *criteria: Each one of:
                - an exact class name (``"java.util.HashMap"``)
                - a wildcard ending in ``*`` (``"java.util.*"``), matched as a prefix
                - a compiled regular expression, matched with ``search``
                - a Python type, matched by its canonical qualified name
                - one of the criterion classes from `heapdiff.histogram.criteria`

        Returns:
            A new histogram sorted by descending size.

        Raises:
            UnsupportedCriteriaError: For any other kind of criterion.
        """
        return self._sorted(self.filter_entries(*criteria))

    def _find_criterion(self, criterion) -> List[HistogramEntry]:
        if isinstance(criterion, (ExactName, TypeName)):
            entry = self.get(criterion.class_name)
            return [entry] if entry is not None else []
        if isinstance(criterion, NamePrefix):
            return [e for e in self if e.class_name.startswith(criterion.prefix)]
        if isinstance(criterion, NamePattern):
            return [e for e in self if criterion.pattern.search(e.class_name)]
        # as_criterion only returns the four variants above
        raise AssertionError(f"unhandled criterion {criterion!r}")

    def sort_by_size(self) -> "MemoryHistogram":
        """Return a copy ordered by descending size; equal sizes keep their order."""
        return self._sorted(list(self))

    def get_top(self, top: int) -> "MemoryHistogram":
        """
        Return the first ``top`` entries of the histogram.

        The order is the current iteration order, so on a sorted histogram
        (a diff or a filter result) these are the largest classes.
        """
        if top <= 0:
            return MemoryHistogram()
        return MemoryHistogram(itertools.islice(self, top))

    # --- Aggregation ---

    def get_total_memory(self) -> int:
        return sum(entry.size for entry in self)

    def get_total_instances(self) -> int:
        return sum(entry.instances for entry in self)

    def diff(self, reference: "MemoryHistogram") -> "MemoryHistogram":
        """
        Difference between this histogram and an earlier reference one.

        For each class:
        - present in both: instances and size deltas (this - reference); the
          class is left out when the size did not change, even if the number
          of instances did.
        - present only here: the entry as is.
        - present only in the reference: the entry with negated counters.

        Returns:
            A new histogram sorted by descending size delta.
        """
        entries: List[HistogramEntry] = []
        for entry in self:
            ref_entry = reference.get(entry.class_name)
            if ref_entry is None:
                entries.append(entry)
                continue
            size = entry.size - ref_entry.size
            if size != 0:
                entries.append(
                    HistogramEntry(entry.class_name, entry.instances - ref_entry.instances, size)
                )
        for ref_entry in reference:
            if ref_entry.class_name not in self:
                entries.append(ref_entry.negated())
        logger.debug(
            f"Diff of {len(self)} against {len(reference)} classes produced {len(entries)} entries"
        )
        return self._sorted(entries)

    # --- Output ---

    def values(self) -> List[str]:
        """Report lines (``class,instances,size``), one per entry."""
        return [str(entry) for entry in self]

    def to_csv(self) -> str:
        return "\n".join([CSV_HEADER, *self.values()])

    def to_dataframe(self) -> pl.DataFrame:
        """
        Convert the histogram to a Polars DataFrame in iteration order.

        Returns:
            DataFrame with columns ``class`` (Utf8), ``instances`` and ``size`` (Int64).
        """
        return pl.DataFrame(
            {
                "class": [e.class_name for e in self],
                "instances": [e.instances for e in self],
                "size": [e.size for e in self],
            },
            schema={"class": pl.Utf8, "instances": pl.Int64, "size": pl.Int64},
        )

    def __str__(self) -> str:
        return self.to_csv()

    def __repr__(self) -> str:
        return f"MemoryHistogram({len(self)} classes, {self.get_total_memory()} bytes)"
