"""
Factory for creating report storage instances.
"""

import logging
from typing import Literal

from .base import ReportStorage
from .csv_storage import CsvStorage
from .parquet_storage import ParquetStorage

logger = logging.getLogger(__name__)


def create_storage(
    format_type: Literal["csv", "parquet"] = "csv",
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy",
) -> ReportStorage:
    """
    Create a storage instance based on the specified format type.

    Args:
        format_type: Storage format type ('csv' or 'parquet')
        compression: Compression algorithm (for Parquet only)

    Raises:
        ValueError: If an unsupported format type is specified
    """
    if format_type == "csv":
        logger.debug("Creating CsvStorage")
        return CsvStorage()
    elif format_type == "parquet":
        logger.debug(f"Creating ParquetStorage with compression: {compression}")
        return ParquetStorage(compression=compression)
    else:
        raise ValueError(f"Unsupported storage format: {format_type}")
