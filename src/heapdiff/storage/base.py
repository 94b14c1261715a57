"""
Abstract base class for report storage implementations.

A report is a MemoryHistogram written to disk in a given format. Every
backend can read a saved report back as a Polars DataFrame with the columns
``class``, ``instances`` and ``size``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

import polars as pl

from ..histogram.memory_histogram import MemoryHistogram


class ReportStorage(ABC):
    """Abstract base class for report storage implementations."""

    # File extension, without the dot
    extension: str = ""

    @abstractmethod
    def save_histogram(self, histogram: MemoryHistogram, path: Union[str, Path]) -> None:
        """
        Save a histogram to the specified path.

        Args:
            histogram: Histogram to save, in its iteration order
            path: File path to save to
        """
        pass

    @abstractmethod
    def load_dataframe(self, path: Union[str, Path]) -> pl.DataFrame:
        """
        Load a saved report as a Polars DataFrame.

        Args:
            path: File path to load from

        Returns:
            DataFrame with columns ``class``, ``instances`` and ``size``
        """
        pass

    def file_exists(self, path: Union[str, Path]) -> bool:
        return Path(path).exists()
