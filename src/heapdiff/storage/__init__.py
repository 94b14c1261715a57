"""
Report storage: writing histograms to disk as CSV text or Parquet.
"""

from .base import ReportStorage
from .csv_storage import CsvStorage
from .factory import create_storage
from .parquet_storage import ParquetStorage
from .report_manager import ReportManager

__all__ = [
    "CsvStorage",
    "ParquetStorage",
    "ReportManager",
    "ReportStorage",
    "create_storage",
]
