"""
Parquet report storage using Polars.
"""

import logging
from pathlib import Path
from typing import Literal, Union

import polars as pl

from ..histogram.memory_histogram import MemoryHistogram
from .base import ReportStorage

logger = logging.getLogger(__name__)


class ParquetStorage(ReportStorage):
    """
    Parquet storage for histogram reports.

    Reports are converted with `MemoryHistogram.to_dataframe` and written with
    the configured compression, keeping the histogram's row order.
    """

    extension = "parquet"

    def __init__(self, compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"):
        self.compression = compression
        logger.debug(f"Initialized ParquetStorage with compression: {compression}")

    def save_histogram(self, histogram: MemoryHistogram, path: Union[str, Path]) -> None:
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            histogram.to_dataframe().write_parquet(path, compression=self.compression)
            logger.debug(f"Saved report with {len(histogram)} rows to {path}")
        except Exception as e:
            logger.error(f"Failed to save report to {path}: {e}")
            raise

    def load_dataframe(self, path: Union[str, Path]) -> pl.DataFrame:
        try:
            df = pl.read_parquet(path)
            logger.debug(f"Loaded report with {len(df)} rows from {path}")
            return df
        except Exception as e:
            logger.error(f"Failed to load report from {path}: {e}")
            raise
