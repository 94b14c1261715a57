"""
Process-wide configuration.

`get_config()` reads and validates config.toml the first time it is called
and returns the same AppConfig afterwards. `set_config_path()` points it at
another file (CLI ``--config``, tests) and drops the cached object.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig
from ..validation import ErrorSeverity, ValidationError, handle_config_error
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# <repo>/conf/config.toml
_DEFAULT_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"

_CONFIG: Optional[AppConfig] = None
_CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH


def set_config_path(config_path: Path) -> None:
    """Use ``config_path`` from the next get_config() call on; it must exist."""
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.debug(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    global _CONFIG
    _CONFIG = None


def _load_config(config_path: Path) -> AppConfig:
    """
    Read and validate ``config_path``.

    A missing default file yields the built-in defaults so that an installed
    package works without a conf/ directory.

    Raises:
        FileNotFoundError: If a custom configuration file is missing
        ValidationError: If a value is invalid
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    if config_path == _DEFAULT_CONFIG_FILE_PATH and not config_path.exists():
        logger.info(f"No configuration file at {config_path}, using built-in defaults")
        return AppConfig()

    try:
        app_config = validate_app_config(load_main_config(config_path))
    except FileNotFoundError as e:
        handle_config_error(e, "loading configuration file", severity=ErrorSeverity.CRITICAL, logger=logger)
        raise
    except ValidationError as e:
        handle_config_error(e, f"validating {config_path}", logger=logger)
        raise
    logger.info(f"Loaded configuration from {config_path}")
    return app_config


def get_config() -> AppConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    return _CONFIG is not None


def get_config_info() -> dict:
    """Summary of the configuration state, for diagnostics."""
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "target_pattern": _CONFIG.capture.target_pattern if _CONFIG else None,
        "report_format": _CONFIG.report.storage.format if _CONFIG else None,
    }
