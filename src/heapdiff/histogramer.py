"""
Snapshot orchestration: take histograms around a unit of work and diff them.

Usage:
    from heapdiff import Histogramer, JcmdSnapshotSource

    histogramer = Histogramer(JcmdSnapshotSource(pid=4242))
    diff = histogramer.get_diff(lambda: client.load_catalog())
    print(diff.filter("com.example.*").get_top(10))
"""

import logging
from typing import Callable, Iterable, Optional, TypeVar

from .config import get_config
from .histogram.memory_histogram import MemoryHistogram
from .parser import parse_histogram
from .snapshot.base import AbstractSnapshotSource
from .snapshot.factory import create_snapshot_source

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Histogramer:
    """
    Creates memory histograms from a snapshot source.

    Attributes:
        source: Where captures come from.
        excluded_packages: Raw class name prefixes dropped from every snapshot.
    """

    def __init__(
        self,
        source: AbstractSnapshotSource,
        excluded_packages: Optional[Iterable[str]] = None,
    ):
        self.source = source
        if excluded_packages is None:
            excluded_packages = get_config().parser.excluded_packages
        self.excluded_packages = tuple(excluded_packages)

    def create_histogram(self) -> MemoryHistogram:
        """
        Take one snapshot and parse it.

        Raises:
            CaptureIOError: If the capture fails.
            StructuralParseError: If the capture layout is not recognized.
            NumericFormatError: If a capture row holds a non-integer count.
        """
        lines = self.source.capture()
        histogram = parse_histogram(lines, self.excluded_packages)
        logger.info(
            f"Histogram from {self.source.describe()}: {len(histogram)} classes, "
            f"{histogram.get_total_memory()} bytes"
        )
        return histogram

    def get_diff(self, code: Callable[[], T]) -> MemoryHistogram:
        """
        Measure the memory retained by ``code``.

        A snapshot is taken before and after calling ``code``. The value it
        returns is kept referenced until the second snapshot has been taken, so
        whatever it roots is still alive when measured.

        Returns:
            The difference between the second and the first snapshot.
        """
        reference = self.create_histogram()
        value = code()
        current = self.create_histogram()
        logger.debug(f"Unit of work returned {type(value).__name__}")
        del value
        return current.diff(reference)

    def compare_captures(self, between: Optional[Callable[[], None]] = None) -> MemoryHistogram:
        """
        Diff two consecutive snapshots, optionally running ``between`` in the middle.

        This is `get_diff` for work that happens outside this process (a
        request sent to the JVM, a user action) where there is no value to keep.
        """
        reference = self.create_histogram()
        if between is not None:
            between()
        current = self.create_histogram()
        return current.diff(reference)


def get_diff(code: Callable[[], T], source: Optional[AbstractSnapshotSource] = None) -> MemoryHistogram:
    """
    Measure the memory retained by ``code`` with a one-off Histogramer.

    When ``source`` is omitted, it is built from the `[capture]` configuration
    (``target_pattern`` selects the JVM).
    """
    if source is None:
        source = create_snapshot_source(get_config().capture)
    return Histogramer(source).get_diff(code)
