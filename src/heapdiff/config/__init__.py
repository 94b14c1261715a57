"""
Configuration management for the heapdiff package.

This module provides a clean interface for loading, validating, and accessing
configuration data from the TOML file with singleton pattern management.
"""

from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
)

from .loader import load_main_config, load_toml_file
from .validators import (
    validate_app_config,
    validate_capture_config,
    validate_parser_config,
    validate_report_config,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_app_config",
    "validate_capture_config",
    "validate_parser_config",
    "validate_report_config",
]
