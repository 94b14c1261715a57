"""
Parser for `jcmd <pid> GC.class_histogram` output.

A capture looks like this (JDK 11)::

    12345:
     num     #instances         #bytes  class name (module)
    -------------------------------------------------------
       1:         60452        4351184  [B (java.base@11.0.2)
       2:         58211        1397064  java.lang.String (java.base@11.0.2)
       ...
    Total        389417       21398848

The instances and bytes columns are right aligned to a width that depends on
the capture, so their boundaries are measured on the first data row (the 4th
line) and then applied to every row after the ``---`` separator.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .histogram.memory_histogram import MemoryHistogram
from .models.entry import HistogramEntry
from .names import translate_name
from .validation import NumericFormatError, StructuralParseError

logger = logging.getLogger(__name__)

COLUMNS_LINE_INDEX = 3
SEPARATOR_PREFIX = "--"
DEFAULT_EXCLUDED_PACKAGES = ("heapdiff.",)


@dataclass(frozen=True)
class ColumnLayout:
    """Character offsets of the numeric columns of a capture."""

    instances_start: int
    instances_end: int
    bytes_start: int
    bytes_end: int


@dataclass(frozen=True)
class RawRow:
    """One data row before class name normalization."""

    class_name: str
    instances: int
    size: int


def _end_of_column(line: str, begin: int) -> int:
    """Skip the padding spaces from ``begin`` and return the index after the value."""
    it = begin
    while it < len(line) and line[it] == " ":
        it += 1
    if it >= len(line):
        raise StructuralParseError(f"Column value not found after offset {begin} in: {line!r}")
    while it < len(line) and line[it] != " ":
        it += 1
    return it


def locate_columns(line: str) -> ColumnLayout:
    """
    Measure the instances and bytes columns on a histogram row.

    Args:
        line: A data row such as ``"   1:      60452    4351184  [B"``.

    Returns:
        The column offsets. The instances value lies between ``instances_start``
        and ``instances_end``, the bytes value between ``bytes_start`` and
        ``bytes_end``, and the class name starts at ``bytes_end``.

    Raises:
        StructuralParseError: If the line has no ``:`` or too few columns.
    """
    idx_colon = line.find(":")
    if idx_colon < 0:
        raise StructuralParseError(f"No ':' found in histogram column line: {line!r}")
    idx_instances = _end_of_column(line, idx_colon + 1)
    idx_bytes = _end_of_column(line, idx_instances + 1)
    return ColumnLayout(
        instances_start=idx_colon + 1,
        instances_end=idx_instances,
        bytes_start=idx_instances + 1,
        bytes_end=idx_bytes,
    )


def find_data_start(lines: Sequence[str]) -> int:
    """
    Index of the first data row, i.e. the line after the ``--`` separator.

    Raises:
        StructuralParseError: If no separator line exists.
    """
    for idx, line in enumerate(lines):
        if line.startswith(SEPARATOR_PREFIX):
            return idx + 1
    raise StructuralParseError("Histogram separator line ('--') not found in capture")


def _parse_int(text: str, field: str, line_number: int) -> int:
    try:
        return int(text)
    except ValueError:
        raise NumericFormatError(
            f"Invalid {field} value {text!r} at line {line_number}",
            line_number=line_number,
            text=text,
        ) from None


def parse_rows(lines: Sequence[str]) -> List[RawRow]:
    """
    Split the data rows of a capture into raw (name, instances, size) rows.

    The trailing totals row is returned too, with an empty class name.

    Raises:
        StructuralParseError: If the capture is too short or has no separator.
        NumericFormatError: If a row holds a non-integer count.
    """
    if len(lines) <= COLUMNS_LINE_INDEX:
        raise StructuralParseError(
            f"Capture has {len(lines)} lines, expected at least {COLUMNS_LINE_INDEX + 1}"
        )
    columns = locate_columns(lines[COLUMNS_LINE_INDEX])
    start = find_data_start(lines)

    rows: List[RawRow] = []
    for idx in range(start, len(lines)):
        line = lines[idx]
        if not line.strip():
            continue
        instances = line[columns.instances_start:columns.instances_end].strip()
        size = line[columns.bytes_start:columns.bytes_end].strip()
        rows.append(
            RawRow(
                class_name=line[columns.bytes_end:].strip(),
                instances=_parse_int(instances, "instances", idx + 1),
                size=_parse_int(size, "bytes", idx + 1),
            )
        )
    return rows


def is_totals_line(class_name: str) -> bool:
    return len(class_name) == 0


def is_excluded(class_name: str, excluded_packages: Iterable[str]) -> bool:
    return any(class_name.startswith(prefix) for prefix in excluded_packages)


def parse_histogram(
    lines: Sequence[str],
    excluded_packages: Iterable[str] = DEFAULT_EXCLUDED_PACKAGES,
) -> MemoryHistogram:
    """
    Build a MemoryHistogram from the lines of one capture.

    Rows are added in capture order. The totals row and classes whose raw name
    starts with one of ``excluded_packages`` are left out.

    Args:
        lines: Capture output split into lines, without line terminators.
        excluded_packages: Class name prefixes of the measuring tool itself.

    Raises:
        StructuralParseError: If the capture layout is not recognized.
        NumericFormatError: If a row holds a non-integer count.
    """
    excluded = tuple(excluded_packages)
    histogram = MemoryHistogram()
    skipped = 0
    for row in parse_rows(lines):
        if is_totals_line(row.class_name) or is_excluded(row.class_name, excluded):
            skipped += 1
            continue
        histogram.add(HistogramEntry(translate_name(row.class_name), row.instances, row.size))
    logger.debug(f"Parsed {len(histogram)} classes from {len(lines)} lines ({skipped} rows skipped)")
    return histogram
