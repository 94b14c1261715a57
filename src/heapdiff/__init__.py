"""
heapdiff: JVM class histogram snapshots, diffs and reports.

This package captures the class histogram of a running JVM (the output of
``jcmd <pid> GC.class_histogram``), turns it into a MemoryHistogram keyed by
readable class names, and answers questions such as "which classes grew while
this code ran?".

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures (histogram entries, configuration)
- validation: Histogram failures, input validation and error handling
- system: jcmd execution and JVM process discovery
- snapshot: Capture sources (live jcmd, saved files, in-memory sequences)
- histogram: MemoryHistogram, filter criteria and ordered storage
- storage: Saving reports as CSV or Parquet
- cli: Command-line interface

Usage:
    From command line:
        heapdiff diff before.txt after.txt --top 10

    Programmatically:
        from heapdiff import Histogramer, JcmdSnapshotSource
        histogramer = Histogramer(JcmdSnapshotSource(pid=4242))
        diff = histogramer.get_diff(lambda: build_cache())
        print(diff.filter("java.util.*").get_top(10))
"""

# Main interfaces
from .config import clear_config_cache, get_config, set_config_path
from .histogramer import Histogramer, get_diff

# Histogram model
from .histogram import (
    ExactName,
    MemoryHistogram,
    NamePattern,
    NamePrefix,
    OrderedMap,
    TypeName,
)
from .models import AppConfig, HistogramEntry
from .names import translate_name
from .parser import parse_histogram

# Snapshot sources
from .snapshot import (
    AbstractSnapshotSource,
    FileSnapshotSource,
    JcmdSnapshotSource,
    SequenceSnapshotSource,
)

# Errors
from .validation import (
    CaptureIOError,
    HistogramError,
    NumericFormatError,
    StructuralParseError,
    UnsupportedCriteriaError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "Histogramer",
    "get_diff",
    # Histogram model
    "MemoryHistogram",
    "HistogramEntry",
    "OrderedMap",
    "ExactName",
    "NamePrefix",
    "NamePattern",
    "TypeName",
    "AppConfig",
    "translate_name",
    "parse_histogram",
    # Snapshot sources
    "AbstractSnapshotSource",
    "JcmdSnapshotSource",
    "FileSnapshotSource",
    "SequenceSnapshotSource",
    # Errors
    "HistogramError",
    "CaptureIOError",
    "StructuralParseError",
    "NumericFormatError",
    "UnsupportedCriteriaError",
    "ValidationError",
]
