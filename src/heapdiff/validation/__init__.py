"""
Validation and error handling for the heapdiff package.

This module provides the typed histogram failures, input validation and
error handling helpers with consistent error reporting across the application.
"""

from .exceptions import (
    CaptureIOError,
    ErrorSeverity,
    HistogramError,
    NumericFormatError,
    StructuralParseError,
    UnsupportedCriteriaError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

from .validators import (
    validate_enum_choice,
    validate_pid,
    validate_positive_float,
    validate_positive_integer,
    validate_regex_pattern,
    validate_string_list,
)

__all__ = [
    # Histogram failures
    "HistogramError",
    "CaptureIOError",
    "StructuralParseError",
    "NumericFormatError",
    "UnsupportedCriteriaError",
    # Error handling
    "ErrorSeverity",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_enum_choice",
    "validate_pid",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_regex_pattern",
    "validate_string_list",
]
