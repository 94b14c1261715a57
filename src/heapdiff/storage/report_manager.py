"""
Report manager for histogram results.

Writes histograms to an output directory using the configured storage format.
"""

import logging
from pathlib import Path
from typing import Optional

from ..histogram.memory_histogram import MemoryHistogram
from ..models.config import StorageConfig
from .factory import create_storage

logger = logging.getLogger(__name__)


class ReportManager:
    """
    Saves histogram reports under one output directory.

    Attributes:
        output_dir: Directory reports are written to (created on demand).
        storage: Backend chosen from the storage configuration.
    """

    def __init__(self, output_dir: Path, storage_config: Optional[StorageConfig] = None):
        self.output_dir = Path(output_dir)
        storage_config = storage_config or StorageConfig()
        self.storage_format = storage_config.format
        self.storage = create_storage(storage_config.format, storage_config.compression)
        logger.debug(
            f"Initialized ReportManager in {self.output_dir} with format: {self.storage_format}"
        )

    def report_path(self, name: str) -> Path:
        return self.output_dir / f"{name}.{self.storage.extension}"

    def save_report(self, histogram: MemoryHistogram, name: str) -> Path:
        """
        Save a histogram as ``<output_dir>/<name>.<ext>``.

        Returns:
            Path of the written file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.report_path(name)
        if self.storage.file_exists(path):
            logger.warning(f"Overwriting existing report: {path}")
        self.storage.save_histogram(histogram, path)
        logger.info(
            f"Saved report '{name}' ({len(histogram)} classes, "
            f"{histogram.get_total_memory()} bytes) to {path}"
        )
        return path
