"""
Reads config.toml into plain dictionaries; validation happens in `validators`.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Parse a TOML file.

    Raises:
        FileNotFoundError: If ``file_path`` does not exist
        tomllib.TOMLDecodeError: If the file is not valid TOML (logged at CRITICAL first)
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise FileNotFoundError(f"{description} not found: {file_path}")

    logger.info(f"Reading {description}: {file_path}")
    raw = file_path.read_bytes()
    try:
        return tomllib.loads(raw.decode("utf-8"))
    except tomllib.TOMLDecodeError as e:
        handle_config_error(e, f"parsing {description}", severity=ErrorSeverity.CRITICAL, logger=logger)
        raise


def load_main_config(config_path: Path) -> Dict[str, Any]:
    return load_toml_file(config_path, "main configuration file")
