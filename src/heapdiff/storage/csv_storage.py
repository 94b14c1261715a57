"""
Plain text report storage.

The file content is exactly the histogram's report text: a
``class,instances,size`` header followed by one row per class.
"""

import logging
from pathlib import Path
from typing import Union

import polars as pl

from ..histogram.memory_histogram import MemoryHistogram
from .base import ReportStorage

logger = logging.getLogger(__name__)

REPORT_SCHEMA = {"class": pl.Utf8, "instances": pl.Int64, "size": pl.Int64}


class CsvStorage(ReportStorage):
    """Writes the `class,instances,size` report text."""

    extension = "csv"

    def save_histogram(self, histogram: MemoryHistogram, path: Union[str, Path]) -> None:
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(histogram.to_csv())
                f.write("\n")
            logger.debug(f"Saved report with {len(histogram)} rows to {path}")
        except Exception as e:
            logger.error(f"Failed to save report to {path}: {e}")
            raise

    def load_dataframe(self, path: Union[str, Path]) -> pl.DataFrame:
        """
        Load a report written by `save_histogram`.

        Class names are not quoted in the report; they never contain commas.
        """
        try:
            return pl.read_csv(path, schema=REPORT_SCHEMA, quote_char=None)
        except Exception as e:
            logger.error(f"Failed to load report from {path}: {e}")
            raise
