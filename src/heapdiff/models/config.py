"""
Configuration data models.

This module contains the configuration structures for heap capture, capture
parsing, report generation and report storage, as loaded from `config.toml`.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal

STORAGE_FORMATS = ("csv", "parquet")
COMPRESSIONS = ("snappy", "gzip", "brotli", "lz4", "zstd")


@dataclass
class StorageConfig:
    """
    Configuration for report storage.

    Attributes:
        format: Report file format
            - 'csv': the plain `class,instances,size` report text
            - 'parquet': columnar report written with Polars
        compression: Compression algorithm for Parquet format

    Note:
        Compression setting only applies to Parquet format.
    """

    format: Literal["csv", "parquet"] = "csv"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "StorageConfig":
        """
        Create a StorageConfig instance from a dictionary.

        Raises:
            ValueError: If invalid configuration values are provided
        """
        format_type = config_dict.get("format", "csv")
        compression = config_dict.get("compression", "snappy")

        if format_type not in STORAGE_FORMATS:
            raise ValueError(f"Unsupported storage format: {format_type}")

        if format_type == "parquet" and compression not in COMPRESSIONS:
            raise ValueError(f"Unsupported compression algorithm: {compression}")

        return cls(format=format_type, compression=compression)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format,
            "compression": self.compression,
        }


@dataclass
class CaptureConfig:
    """
    Settings for taking a heap histogram with `jcmd`, loaded from `[capture]`.
    """

    # Path or name of the jcmd executable.
    jcmd_path: str = "jcmd"
    # Count only reachable objects (jcmd forces a full GC first). False adds "-all".
    live_only: bool = True
    # Maximum time to wait for one capture.
    timeout_seconds: float = 60.0
    # Regex matched against java command lines to locate the target JVM. Empty means unset.
    target_pattern: str = ""


@dataclass
class ParserConfig:
    """
    Settings for turning capture text into a histogram, loaded from `[parser]`.
    """

    # Raw class name prefixes dropped from every capture (the tool's own classes).
    excluded_packages: List[str] = field(default_factory=lambda: ["heapdiff."])


@dataclass
class ReportConfig:
    """
    Settings for printing and saving reports, loaded from `[report]`.
    """

    top_n: int = 20
    output_dir: Path = Path("logs")
    skip_plots: bool = True
    storage: StorageConfig = field(default_factory=StorageConfig)


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    capture: CaptureConfig = field(default_factory=CaptureConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
