"""
Data models for the heapdiff package.

Configuration Models:
- Capture, parser and report settings
- Report storage format and compression

Histogram Models:
- HistogramEntry, the per-class record shared by snapshots and diffs
"""

from .config import AppConfig, CaptureConfig, ParserConfig, ReportConfig, StorageConfig
from .entry import HistogramEntry

__all__ = [
    # Configuration
    "AppConfig",
    "CaptureConfig",
    "ParserConfig",
    "ReportConfig",
    "StorageConfig",
    # Histogram
    "HistogramEntry",
]
