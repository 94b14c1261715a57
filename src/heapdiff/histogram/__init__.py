"""
Histogram data model: ordered storage, filter criteria and the
MemoryHistogram aggregate with its diff, filter and top-N views.
"""

from .criteria import (
    Criterion,
    ExactName,
    NamePattern,
    NamePrefix,
    TypeName,
    as_criterion,
)
from .memory_histogram import CSV_HEADER, MemoryHistogram
from .ordered_map import OrderedMap

__all__ = [
    "CSV_HEADER",
    "Criterion",
    "ExactName",
    "MemoryHistogram",
    "NamePattern",
    "NamePrefix",
    "OrderedMap",
    "TypeName",
    "as_criterion",
]
